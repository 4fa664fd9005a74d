from typing import Any, Callable

import pytest
from fastapi.testclient import TestClient

from tests.test_data import RUN_NAME, RUN_START
from workout_logger.main import app
from workout_logger.models.workout import UnitType, Workout
from workout_logger.repositories.workout import InMemoryWorkoutRepository
from workout_logger.routes import workout as workout_routes
from workout_logger.services.workout import WorkoutService

# --------------- Item Factories ---------------


@pytest.fixture
def workout_factory() -> Callable[..., Workout]:
    def _make(**overrides: Any) -> Workout:
        base = Workout(
            name=RUN_NAME,
            start_date_time=RUN_START,
            duration=10,
            distance=10.0,
            unit=UnitType.KILOMETERS,
            notes="",
        )
        return base.model_copy(update=overrides)

    return _make


# --------------- Store / Service ---------------


@pytest.fixture
def memory_repo() -> InMemoryWorkoutRepository:
    return InMemoryWorkoutRepository()


@pytest.fixture
def service(memory_repo) -> WorkoutService:
    return WorkoutService(memory_repo)


# --------------- Test Clients ---------------


@pytest.fixture(scope="session")
def app_instance():
    return app


@pytest.fixture
def client(app_instance, service):
    """
    Client whose routes share the `service` fixture,
    so tests can seed and inspect the same store.
    """
    app_instance.dependency_overrides[workout_routes.get_workout_service] = (
        lambda: service
    )
    client = TestClient(app_instance, raise_server_exceptions=False)

    try:
        yield client
    finally:
        app_instance.dependency_overrides.pop(workout_routes.get_workout_service, None)
