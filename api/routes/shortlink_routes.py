"""Shortlink endpoints.

- ``/{type}/{id}``: the shortlinks themselves, answered with a 301 or a 404
- ``/api/shortlinks``: shortlink details for the front page and resources

The short path route uses a dedicated path convertor matching
``[a-z](/.*)?`` so it only claims single-letter namespaces; everything
else falls through to the rest of the app.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Request, Response
from fastapi.responses import PlainTextResponse, RedirectResponse
from starlette.convertors import Convertor, register_url_convertor

from core.wide_event import set_wide_event_fields
from rendering import render_shortlink_tag, shortlink_header
from schemas import ShortlinkResponse
from services.bootstrap import ShortlinkServices
from services.classifier_service import UnclassifiableResourceError
from services.shortlink_service import Shortlink


class ShortPathConvertor(Convertor[str]):
    regex = "[a-z](?:/.*)?"

    def convert(self, value: str) -> str:
        return value

    def to_string(self, value: str) -> str:
        return value


register_url_convertor("shortpath", ShortPathConvertor())


def get_shortlink_services(request: Request) -> ShortlinkServices:
    return request.app.state.shortlinks


Shortlinks = Annotated[ShortlinkServices, Depends(get_shortlink_services)]

api_router = APIRouter(prefix="/api/shortlinks", tags=["shortlinks"])
redirect_router = APIRouter(include_in_schema=False)


def _shortlink_response(shortlink: Shortlink, response: Response) -> ShortlinkResponse:
    response.headers["Link"] = shortlink_header(shortlink.url)
    return ShortlinkResponse(
        resource_id=shortlink.resource_id,
        type_prefix=shortlink.type_prefix,
        short_code=shortlink.short_code,
        shortlink=shortlink.url,
        link_tag=str(render_shortlink_tag(shortlink.url)),
    )


def _resource_shortlink(services: ShortlinkServices, resource_id: int) -> Shortlink:
    resource = services.store.get_resource(resource_id)
    if resource is None:
        raise HTTPException(status_code=404, detail="Resource not found")

    try:
        return services.generator.for_resource(resource)
    except UnclassifiableResourceError as e:
        raise HTTPException(
            status_code=422,
            detail=f"Resource {e.resource_id} has no shortlink type for {e.kind!r}",
        ) from e


@api_router.get("", response_model=ShortlinkResponse)
def front_page_shortlink(
    services: Shortlinks, response: Response
) -> ShortlinkResponse:
    """Shortlink for the site's front page."""
    return _shortlink_response(services.generator.front_page(), response)


@api_router.get(
    "/{resource_id}",
    response_model=ShortlinkResponse,
    responses={
        404: {"description": "Unknown resource"},
        422: {"description": "Resource cannot be classified"},
    },
)
def resource_shortlink(
    services: Shortlinks,
    response: Response,
    resource_id: int = Path(ge=1),
) -> ShortlinkResponse:
    """Shortlink for a single resource, as shown in the editor's shortlink panel."""
    shortlink = _resource_shortlink(services, resource_id)
    set_wide_event_fields(shortlink_type=shortlink.type_prefix)
    return _shortlink_response(shortlink, response)


@api_router.get(
    "/{resource_id}/feed-link",
    response_class=PlainTextResponse,
    responses={404: {"description": "Unknown resource"}},
)
def resource_feed_link(
    services: Shortlinks, resource_id: int = Path(ge=1)
) -> PlainTextResponse:
    """The ``<link rel="shortlink">`` line for a resource's feed entry."""
    shortlink = _resource_shortlink(services, resource_id)
    return PlainTextResponse(str(render_shortlink_tag(shortlink.url)))


@redirect_router.api_route("/{hum:shortpath}", methods=["GET", "HEAD"])
def handle_parsed_request(hum: str, services: Shortlinks) -> RedirectResponse:
    """Redirect a shortlink, or 404 so the app's not-found handling takes over."""
    url = services.dispatcher.dispatch(hum)
    if url is None:
        raise HTTPException(status_code=404, detail="Not Found")
    return RedirectResponse(url=url, status_code=301)
