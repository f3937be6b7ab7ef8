"""Pydantic schemas for resources and API responses."""

from enum import Enum as PyEnum

from pydantic import BaseModel, ConfigDict, Field


class ShortlinkContext(str, PyEnum):
    """Where a shortlink request comes from.

    QUERY: the resource (or front page) being served by the current request
    POST: an explicitly named resource
    """

    QUERY = "query"
    POST = "post"


class Resource(BaseModel):
    """A host-managed resource that can be reached through a shortlink.

    ``type`` is the host's resource type (post, page, attachment, ...).
    ``format`` is the content format for posts (status, aside, photo, ...).
    ``mime_type`` only matters for attachments.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=0)
    permalink: str
    type: str = "post"
    format: str = ""
    mime_type: str = ""


class ResourceCatalog(BaseModel):
    """On-disk catalog of resources the host knows about."""

    resources: list[Resource] = Field(default_factory=list)


# Functions accepting "a resource" take either its id or the record itself
ResourceRef = int | Resource


class ShortlinkResponse(BaseModel):
    """Shortlink details for one resource (or the front page)."""

    resource_id: int
    type_prefix: str | None = None
    short_code: str | None = None
    shortlink: str
    link_tag: str


class HealthResponse(BaseModel):
    status: str
    service: str
    resources: int
