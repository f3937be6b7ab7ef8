"""Health check endpoint."""

from fastapi import APIRouter, Request

from schemas import HealthResponse

router = APIRouter(tags=["health"])

SERVICE = "hum-shortlinks"


@router.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    """Health check endpoint; reports how many resources are resolvable."""
    store = request.app.state.shortlinks.store
    try:
        resources = len(store)
    except TypeError:
        # Host-provided stores need not be sized
        resources = -1
    return HealthResponse(status="healthy", service=SERVICE, resources=resources)
