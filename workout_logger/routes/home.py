import platform

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from workout_logger.settings import settings
from workout_logger.utils.dates import now

router = APIRouter()

BUILD_TIME = now()


@router.get("/healthz", response_class=JSONResponse)
def healthz():
    return {"status": "ok"}


@router.get("/meta")
async def get_meta():
    return {
        "app_name": settings.PROJECT_NAME,
        "version": "0.1.0",
        "build_time": BUILD_TIME,
        "python_version": platform.python_version(),
        "environment": settings.ENV,
        "storage_backend": settings.STORAGE_BACKEND,
    }
