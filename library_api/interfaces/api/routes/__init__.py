from fastapi import APIRouter

from ....infrastructure.config.settings import get_settings
from .book import router as book_router
from .book_borrow import router as book_borrow_router
from .user import router as user_router

router = APIRouter()
router.include_router(user_router)
router.include_router(book_router)
router.include_router(book_borrow_router)


@router.get(
    "/health",
    summary="API Health Check",
    description="Simple health check endpoint for monitoring and container orchestration.",
    responses={
        200: {"description": "API is healthy and responding"},
    },
)
async def health_check():
    """Health check endpoint for Docker health checks."""
    return {"status": "healthy", "message": f"{get_settings().APP_NAME} is running"}
