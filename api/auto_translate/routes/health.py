import time

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """
    Health check endpoint reporting translator readiness.

    Returns "initializing" until the translator has been built by the lifespan hook.
    """
    service = getattr(request.app.state, "translation_service", None)
    if service is None:
        return {
            "status": "initializing",
            "timestamp": int(time.time()),
            "services": {"translator": "initializing"},
        }

    dictionary_stats = service.resolver.get_stats()
    return {
        "status": "healthy",
        "timestamp": int(time.time()),
        "services": {"translator": "healthy"},
        "dictionaries": {
            "global_open": dictionary_stats["global"]["is_open"],
            "project_open": (
                dictionary_stats["project"]["is_open"]
                if dictionary_stats["project"]
                else None
            ),
        },
        "automatic_translation": service.is_automatic_translation(),
    }


@router.get("/health/live")
async def liveness_check():
    """
    Liveness probe that checks if the service is running.
    """
    return {"status": "alive"}
