from fastapi import APIRouter

from .analyze import router as analyze_router
from .health import router as health_router
from .jd import router as jd_router
from .recruit import router as recruit_router
from .resume import router as resume_router


api_router = APIRouter()

api_router.include_router(health_router, tags=["health"])
api_router.include_router(jd_router)
api_router.include_router(recruit_router)
api_router.include_router(resume_router)
api_router.include_router(analyze_router)
