from fastapi import APIRouter

from household_service.api.routers import households

api_router = APIRouter()

api_router.include_router(households.router)
