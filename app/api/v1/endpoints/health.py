"""Health check endpoints. No dependencies; used for liveness and readiness probes."""

from fastapi import APIRouter, Request

from app.schemas.health import HealthResponse, ReadinessResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get("/ready", response_model=ReadinessResponse)
def readiness_check(request: Request) -> ReadinessResponse:
    """Report whether the store and cache are usable.

    A missing cache only slows listings down, so it does not make the
    service degraded; a missing store does.
    """
    state = request.app.state
    cache = getattr(state, "cache", None)
    store_ok = getattr(state, "firestore", None) is not None
    return ReadinessResponse(
        status="ok" if store_ok else "degraded",
        store=store_ok,
        cache=cache is not None and cache.is_available(),
    )
