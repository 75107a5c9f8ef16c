from fastapi import APIRouter

from linguastore.api.routes import auth, health, translation

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(auth.router, tags=["auth"])
api_router.include_router(translation.router, prefix="/translation", tags=["translation"])
