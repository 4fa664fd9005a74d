from functools import lru_cache

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from workout_logger.models.workout import OperationResult, UnitChange, Workout
from workout_logger.repositories.workout import (
    DynamoWorkoutRepository,
    InMemoryWorkoutRepository,
    WorkoutRepository,
)
from workout_logger.services.workout import WorkoutService
from workout_logger.settings import settings
from workout_logger.utils.log import logger

router = APIRouter(prefix="/api/workouts", tags=["workout"])

STATUS_FOR_ERROR = {
    None: 200,
    "validation": 400,
    "import_format": 400,
    "not_found": 404,
    "internal": 500,
}


def build_workout_repo() -> WorkoutRepository:
    if settings.uses_dynamo:
        logger.info(f"Using DynamoDB table {settings.DDB_TABLE_NAME}")
        return DynamoWorkoutRepository()
    logger.info("Using in-memory workout store")
    return InMemoryWorkoutRepository()


@lru_cache
def get_workout_service() -> WorkoutService:  # pragma: no cover
    """One service per process so the in-memory store survives between requests"""
    return WorkoutService(build_workout_repo())


def to_response(result: OperationResult, success_status: int = 200) -> JSONResponse:
    status_code = success_status if result.success else STATUS_FOR_ERROR[result.error]
    return JSONResponse(
        content=result.model_dump(mode="json", by_alias=True),
        status_code=status_code,
    )


# ---------------------- Read ---------------------------


@router.get("")
def list_workouts(
    name: str | None = None,
    service: WorkoutService = Depends(get_workout_service),
):
    """All workouts, or those whose name contains `name`"""
    return to_response(service.search(name))


@router.get("/export")
def export_workouts(service: WorkoutService = Depends(get_workout_service)):
    result = service.export_text()
    if not result.success:
        return to_response(result)

    return Response(
        content=result.data,
        media_type="text/csv",
        headers={
            "Content-Disposition": f'attachment; filename="{settings.EXPORT_FILENAME}"'
        },
    )


@router.get("/{workout_id}")
def get_workout(
    workout_id: int, service: WorkoutService = Depends(get_workout_service)
):
    return to_response(service.get(workout_id))


# ---------------------- Write ---------------------------


@router.post("")
def create_workout(
    workout: Workout, service: WorkoutService = Depends(get_workout_service)
):
    return to_response(service.add(workout), success_status=201)


@router.put("/units")
def convert_units(
    change: UnitChange, service: WorkoutService = Depends(get_workout_service)
):
    return to_response(service.convert_all(change.unit))


@router.post("/import")
async def import_workouts(
    request: Request, service: WorkoutService = Depends(get_workout_service)
):
    """Body is the raw exchange text, one workout per line"""
    body = await request.body()
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError:
        return to_response(
            OperationResult.fail("Import file must be UTF-8 text.", error="import_format")
        )
    return to_response(service.import_text(text))


@router.put("/{workout_id}")
def update_workout(
    workout_id: int,
    workout: Workout,
    service: WorkoutService = Depends(get_workout_service),
):
    return to_response(service.update(workout_id, workout))


@router.delete("/{workout_id}")
def delete_workout(
    workout_id: int, service: WorkoutService = Depends(get_workout_service)
):
    return to_response(service.delete(workout_id))
