from fastapi import APIRouter

from barrage.api.home_routes import router as home_router
from barrage.api.stress_router import router as stress_router

api_router = APIRouter()
api_router.include_router(
    home_router,
    tags=["home"],
)

api_router.include_router(
    stress_router,
    prefix="/stress",
    tags=["Stress Testing"]
)
