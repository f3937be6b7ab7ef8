"""Service layer for shortlink logic.

Services hold the shortlink rules, keeping routes thin and focused on
HTTP handling:
- base60: short code encoding and decoding
- classifier_service: resource -> type prefix
- resolver_service: (type, id) -> destination URL
- dispatch_service: raw short path -> destination, with the punctuation retry
- legacy_service: legacy /{id} paths -> permalink
- shortlink_service: resource -> shortlink URL
- bootstrap: builds all of the above around one store and hook registry

Layer hierarchy:
    Routes (HTTP) -> Services (shortlink rules) -> Repositories (resources)

Services return plain values or dataclasses and signal "not found" with
``None``; status codes and response formatting belong to the routes.
"""
