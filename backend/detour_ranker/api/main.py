from fastapi import APIRouter

from detour_ranker.api.routes import matches
from detour_ranker.core.config import settings

api_router = APIRouter()
api_router.include_router(matches.router_matches)


# Add health check endpoint
@api_router.get("/health", tags=["utils"])
def health_check():
    return {"status": "healthy", "service": settings.PROJECT_NAME}
