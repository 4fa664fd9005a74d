# Run using uv run python -m scripts.seed [path/to/workouts.csv]

import sys
from pathlib import Path

from workout_logger.repositories.workout import DynamoWorkoutRepository
from workout_logger.services.workout import WorkoutService
from workout_logger.settings import settings

DEFAULT_SEED_FILE = Path(__file__).parent / "seed_workouts.csv"


def main(file_path: str):
    service = WorkoutService(DynamoWorkoutRepository())

    result = service.import_file(file_path)
    if not result.success:
        raise SystemExit(f"Seeding failed: {result.message}")
    print(f"Seeded {len(result.data)} workouts into {settings.DDB_TABLE_NAME}")


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else str(DEFAULT_SEED_FILE))
