from pathlib import Path
from typing import Iterable, List

from workout_logger.models.workout import OperationResult, UnitType, Workout
from workout_logger.repositories.errors import RepoError, WorkoutNotFoundError
from workout_logger.repositories.workout import WorkoutRepository
from workout_logger.services import codec
from workout_logger.utils import files
from workout_logger.utils.log import logger
from workout_logger.utils.units import convert_workout
from workout_logger.utils.validation import validate_id, validate_workout


def _not_found(workout_id: int) -> OperationResult:
    return OperationResult.fail(
        f"Workout with ID {workout_id} not found.", error="not_found"
    )


class WorkoutService:
    """
    Business operations over a WorkoutRepository.

    Every method returns an OperationResult. Validation always runs before
    the repository is touched, so a failed call never leaves a partial change.
    Repository failures are logged and reported as "internal" results.
    """

    def __init__(self, repo: WorkoutRepository):
        self._repo = repo

    # ----------------------- Add -----------------------------

    def add(self, workout: Workout) -> OperationResult[Workout]:
        error = validate_workout(workout)
        if error is not None:
            logger.info(f"Rejected workout '{workout.name}': {error}")
            return OperationResult.fail(error)

        try:
            saved = self._repo.add(workout)
        except RepoError as e:
            logger.exception("Error adding workout")
            return OperationResult.fail(f"Error adding workout: {e}", error="internal")

        logger.info(f"Added workout id={saved.id}")
        return OperationResult.ok(saved, f"Added workout: {saved.name}")

    # ----------------------- Get -----------------------------

    def get_all(self) -> OperationResult[List[Workout]]:
        try:
            workouts = self._repo.get_all()
        except RepoError as e:
            logger.exception("Error retrieving workouts")
            return OperationResult.fail(
                f"Error retrieving workouts: {e}", error="internal"
            )
        return OperationResult.ok(workouts, "Retrieved all workouts.")

    def search(self, term: str | None) -> OperationResult[List[Workout]]:
        try:
            workouts = self._repo.find_by_name_contains(term)
        except RepoError as e:
            logger.exception("Error searching workouts")
            return OperationResult.fail(
                f"Error searching workouts: {e}", error="internal"
            )
        return OperationResult.ok(
            workouts, f'Search for "{term or ""}" returned {len(workouts)} results'
        )

    def exists(self, workout_id: int) -> OperationResult[bool]:
        try:
            found = self._repo.exists_by_id(workout_id)
        except RepoError as e:
            logger.exception(f"Error checking workout {workout_id}")
            return OperationResult.fail(
                f"Error checking workout: {e}", error="internal"
            )
        return OperationResult.ok(found, "Workout exists." if found else "Workout not found.")

    def get(self, workout_id: int) -> OperationResult[Workout]:
        error = validate_id(workout_id)
        if error is not None:
            return OperationResult.fail(error)

        try:
            workout = self._repo.get_by_id(workout_id)
        except WorkoutNotFoundError:
            return _not_found(workout_id)
        except RepoError as e:
            logger.exception(f"Error fetching workout {workout_id}")
            return OperationResult.fail(
                f"Error fetching workout: {e}", error="internal"
            )
        return OperationResult.ok(workout, f"Found workout {workout_id}")

    # ----------------------- Update -----------------------------

    def update(self, workout_id: int, workout: Workout) -> OperationResult[Workout]:
        """
        Replace every field of an existing workout except its id.
        """
        error = validate_id(workout_id)
        if error is not None:
            return OperationResult.fail(error)

        try:
            if not self._repo.exists_by_id(workout_id):
                return _not_found(workout_id)

            error = validate_workout(workout)
            if error is not None:
                logger.info(f"Rejected update of workout {workout_id}: {error}")
                return OperationResult.fail(error)

            saved = self._repo.replace_by_id(workout_id, workout)
        except WorkoutNotFoundError:
            return _not_found(workout_id)
        except RepoError as e:
            logger.exception(f"Error updating workout {workout_id}")
            return OperationResult.fail(
                f"Error updating workout: {e}", error="internal"
            )

        return OperationResult.ok(saved, f"Workout {workout_id} updated.")

    # ----------------------- Delete -----------------------------

    def delete(self, workout_id: int) -> OperationResult[int]:
        error = validate_id(workout_id)
        if error is not None:
            return OperationResult.fail(error)

        try:
            if not self._repo.exists_by_id(workout_id):
                return _not_found(workout_id)
            self._repo.delete_by_id(workout_id)
        except WorkoutNotFoundError:
            return _not_found(workout_id)
        except RepoError as e:
            logger.exception(f"Error deleting workout {workout_id}")
            return OperationResult.fail(
                f"Error deleting workout: {e}", error="internal"
            )

        logger.info(f"Deleted workout id={workout_id}")
        return OperationResult.ok(workout_id, f"Deleted workout ID {workout_id}")

    # ----------------------- Units -----------------------------

    def convert_all(self, target_unit: UnitType | None) -> OperationResult[List[Workout]]:
        if target_unit is None:
            return OperationResult.fail("Target unit cannot be null.")

        try:
            workouts = self._repo.get_all()
            if not workouts:
                return OperationResult.fail("No workouts to convert.")

            converted = []
            for workout in workouts:
                new = convert_workout(workout, target_unit)
                if new is not workout:
                    new = self._repo.replace_by_id(workout.id, new)
                converted.append(new)
        except RepoError as e:
            logger.exception("Error converting workouts")
            return OperationResult.fail(
                f"Error converting workouts: {e}", error="internal"
            )

        logger.info(f"Converted {len(converted)} workouts to {target_unit.value}")
        return OperationResult.ok(
            converted, f"Converted all workouts to {target_unit.value}"
        )

    # ----------------------- Import / export -----------------------------

    def import_text(self, text: str | Iterable[str]) -> OperationResult[List[Workout]]:
        """
        Decode the whole input first, then add each workout.
        A bad line aborts the import before anything is stored.
        """
        try:
            decoded = codec.decode(text)
        except codec.ImportFormatError as e:
            logger.info(f"Import rejected: {e}")
            return OperationResult.fail(str(e), error="import_format")

        imported = []
        for line_number, workout in enumerate(decoded, start=1):
            result = self.add(workout)
            if not result.success:
                logger.error(f"Import failed after decoding, line {line_number}: {result.message}")
                return OperationResult.fail(
                    f"Unexpected error importing line {line_number}: {result.message}",
                    error="internal",
                )
            imported.append(result.data)

        return OperationResult.ok(imported, f"Imported {len(imported)} workouts.")

    def import_file(self, file_path: str) -> OperationResult[List[Workout]]:
        error = files.check_import_path(file_path)
        if error is not None:
            return OperationResult.fail(error)

        try:
            with open(file_path, encoding="utf-8-sig") as f:
                lines = f.readlines()
        except (OSError, UnicodeDecodeError) as e:
            logger.exception(f"Error reading {file_path}")
            return OperationResult.fail(f"Error reading file: {e}", error="internal")

        result = self.import_text(lines)
        if result.success:
            result.message = f"Imported {len(result.data)} workouts from {file_path}"
        return result

    def export_text(self) -> OperationResult[str]:
        result = self.get_all()
        if not result.success:
            return OperationResult.fail(result.message, error=result.error)

        try:
            text = codec.encode(result.data)
        except codec.ExportFormatError as e:
            logger.info(f"Export rejected: {e}")
            return OperationResult.fail(str(e), error="validation")

        return OperationResult.ok(text, f"Exported {len(result.data)} workouts.")

    def export_file(self, file_path: str) -> OperationResult[str]:
        error = files.check_export_path(file_path)
        if error is not None:
            return OperationResult.fail(error)

        result = self.export_text()
        if not result.success:
            return result

        try:
            Path(file_path).write_text(result.data, encoding="utf-8")
        except OSError as e:
            logger.exception(f"Error writing {file_path}")
            return OperationResult.fail(
                f"Error writing to file: {e}", error="internal"
            )

        count = result.data.count("\n")
        return OperationResult.ok(file_path, f"Exported {count} workouts to {file_path}")
