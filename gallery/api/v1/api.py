# File: gallery/api/v1/api.py
from fastapi import APIRouter
from gallery.api.v1.endpoints import gallery, feedback_admin

# Create main API router
api_router = APIRouter()

api_router.include_router(
    gallery.router,
    prefix="/gallery",
    tags=["gallery"]
)

api_router.include_router(
    feedback_admin.router,
    prefix="/admin",
    tags=["feedback-admin"]
)
