"""API routes for the FastAPI application."""

from fastapi import APIRouter

from lorekeeper.api.v1.endpoints import (
    archetypes,
    characters,
    health,
    images,
    items,
    perks,
    races,
    skills,
    tags,
    users,
)

api_router = APIRouter()
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(characters.router, prefix="/characters", tags=["characters"])
api_router.include_router(items.router, prefix="/items", tags=["items"])
api_router.include_router(races.router, prefix="/races", tags=["races"])
api_router.include_router(archetypes.router, prefix="/archetypes", tags=["archetypes"])
api_router.include_router(perks.router, prefix="/perks", tags=["perks"])
api_router.include_router(skills.router, prefix="/skills", tags=["skills"])
api_router.include_router(tags.router, prefix="/tags", tags=["tags"])
api_router.include_router(images.router, prefix="/images", tags=["images"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
