import threading
from decimal import Decimal
from typing import List, Protocol

from boto3.dynamodb.conditions import Key

from workout_logger.models.workout import UnitType, Workout
from workout_logger.repositories.base import DynamoRepository
from workout_logger.repositories.errors import (
    RepoConditionError,
    RepoError,
    WorkoutNotFoundError,
    WorkoutRepoError,
)
from workout_logger.utils import dates, db
from workout_logger.utils.log import logger


class WorkoutRepository(Protocol):
    def add(self, workout: Workout) -> Workout: ...
    def get_all(self) -> List[Workout]: ...
    def find_by_name_contains(self, term: str | None) -> List[Workout]: ...
    def replace_by_id(self, workout_id: int, workout: Workout) -> Workout: ...
    def delete_by_id(self, workout_id: int) -> None: ...
    def get_by_id(self, workout_id: int) -> Workout: ...
    def exists_by_id(self, workout_id: int) -> bool: ...


def _name_matches(workout: Workout, term: str | None) -> bool:
    # A blank term matches everything
    if term is None or not term.strip():
        return True
    return term.lower() in (workout.name or "").lower()


class InMemoryWorkoutRepository:
    """
    Workouts kept in insertion order in a list.

    Ids come from a counter owned by this instance and are never reused.
    Stored records are copies, callers never hold a reference into the list.
    """

    def __init__(self):
        self._workouts: List[Workout] = []
        self._next_id = 1
        self._lock = threading.RLock()

    def _index_of(self, workout_id: int) -> int:
        for i, w in enumerate(self._workouts):
            if w.id == workout_id:
                return i
        raise WorkoutNotFoundError(workout_id)

    def add(self, workout: Workout) -> Workout:
        with self._lock:
            new_id = self._next_id
            self._next_id += 1
            stored = workout.model_copy(deep=True, update={"id": new_id})
            self._workouts.append(stored)

        logger.debug(f"Stored workout id={new_id} name='{stored.name}'")
        return stored.model_copy(deep=True)

    def get_all(self) -> List[Workout]:
        with self._lock:
            return [w.model_copy(deep=True) for w in self._workouts]

    def get_by_id(self, workout_id: int) -> Workout:
        with self._lock:
            return self._workouts[self._index_of(workout_id)].model_copy(deep=True)

    def find_by_name_contains(self, term: str | None) -> List[Workout]:
        with self._lock:
            return [
                w.model_copy(deep=True)
                for w in self._workouts
                if _name_matches(w, term)
            ]

    def replace_by_id(self, workout_id: int, workout: Workout) -> Workout:
        with self._lock:
            index = self._index_of(workout_id)
            stored = workout.model_copy(deep=True, update={"id": workout_id})
            self._workouts[index] = stored

        logger.debug(f"Replaced workout id={workout_id}")
        return stored.model_copy(deep=True)

    def delete_by_id(self, workout_id: int) -> None:
        with self._lock:
            index = self._index_of(workout_id)
            del self._workouts[index]

        logger.debug(f"Deleted workout id={workout_id}")

    def exists_by_id(self, workout_id: int) -> bool:
        with self._lock:
            return any(w.id == workout_id for w in self._workouts)


class DynamoWorkoutRepository(DynamoRepository[Workout]):
    """
    Implementation of WorkoutRepository on a single DynamoDB table.

    Workouts live under PK=WORKOUTS with a zero padded id in the SK, so a
    query returns them in id order. Ids come from an atomic counter item.
    """

    def _to_model(self, item: dict) -> Workout:
        try:
            return Workout(
                id=int(item["id"]),
                name=item["name"],
                start_date_time=dates.parse_start(item["start_date_time"]),
                duration=int(item["duration"]),
                distance=float(item["distance"]),
                unit=UnitType(item["unit"]),
                notes=item.get("notes"),
            )
        except Exception as e:
            logger.error(f"_to_model failed: {e}")
            raise WorkoutRepoError("Failed to create workout model from item") from e

    def _to_item(self, workout_id: int, workout: Workout) -> dict:
        item = {
            **db.build_workout_key(workout_id),
            "type": "workout",
            "id": workout_id,
            "name": workout.name,
            "start_date_time": dates.format_start(workout.start_date_time),
            "duration": workout.duration,
            # DynamoDB has no float type
            "distance": Decimal(repr(workout.distance)),
            "unit": workout.unit.value if workout.unit else None,
        }
        if workout.notes is not None:
            item["notes"] = workout.notes
        return item

    def _next_id(self) -> int:
        try:
            resp = self._safe_update(
                Key=db.build_counter_key(),
                UpdateExpression="ADD #count :inc",
                ExpressionAttributeNames={"#count": "count"},
                ExpressionAttributeValues={":inc": 1},
                ReturnValues="UPDATED_NEW",
            )
            return int(resp["Attributes"]["count"])
        except RepoError as e:
            logger.error(f"Failed to allocate workout id: {e}")
            raise WorkoutRepoError("Failed to allocate workout id") from e

    # ----------------------- Get -----------------------------

    def get_all(self) -> List[Workout]:
        logger.debug("Fetching all workouts")

        try:
            items = self._safe_query(
                KeyConditionExpression=Key("PK").eq(db.WORKOUTS_PK)
                & Key("SK").begins_with(db.WORKOUT_SK_PREFIX)
            )
        except RepoError as e:
            logger.error(f"Repo error fetching workouts: {e}")
            raise WorkoutRepoError("Failed to fetch workouts from database") from e

        logger.debug(f"{len(items)} items returned from DynamoDB")
        return [self._to_model(item) for item in items]

    def find_by_name_contains(self, term: str | None) -> List[Workout]:
        # DynamoDB contains() is case sensitive, so filter here
        return [w for w in self.get_all() if _name_matches(w, term)]

    def get_by_id(self, workout_id: int) -> Workout:
        try:
            item = self._safe_get(Key=db.build_workout_key(workout_id))
        except RepoError as e:
            logger.error(f"Repo error reading workout {workout_id}: {e}")
            raise WorkoutRepoError("Failed to read workout from database") from e

        if item is None:
            raise WorkoutNotFoundError(workout_id)
        return self._to_model(item)

    def exists_by_id(self, workout_id: int) -> bool:
        try:
            item = self._safe_get(Key=db.build_workout_key(workout_id))
        except RepoError as e:
            logger.error(f"Repo error reading workout {workout_id}: {e}")
            raise WorkoutRepoError("Failed to read workout from database") from e
        return item is not None

    # ----------------------- Add -----------------------------

    def add(self, workout: Workout) -> Workout:
        new_id = self._next_id()
        logger.debug(f"Creating workout id={new_id} name='{workout.name}'")

        try:
            self._safe_put(
                self._to_item(new_id, workout),
                ConditionExpression="attribute_not_exists(PK)",
            )
        except RepoError as e:
            logger.error(f"Failed to put workout: {e}")
            raise WorkoutRepoError("Failed to create workout in database") from e

        return workout.model_copy(deep=True, update={"id": new_id})

    # ----------------------- Update -----------------------------

    def replace_by_id(self, workout_id: int, workout: Workout) -> Workout:
        logger.debug(f"Replacing workout {workout_id}")

        try:
            self._safe_put(
                self._to_item(workout_id, workout),
                ConditionExpression="attribute_exists(PK)",
            )
        except RepoConditionError as e:
            raise WorkoutNotFoundError(workout_id) from e
        except RepoError as e:
            logger.error(f"Failed to update workout: {e}")
            raise WorkoutRepoError("Failed to update workout in database") from e

        return workout.model_copy(deep=True, update={"id": workout_id})

    # ----------------------- Delete -----------------------------

    def delete_by_id(self, workout_id: int) -> None:
        logger.debug(f"Deleting workout {workout_id}")

        try:
            self._safe_delete(
                Key=db.build_workout_key(workout_id),
                ConditionExpression="attribute_exists(PK)",
            )
        except RepoConditionError as e:
            raise WorkoutNotFoundError(workout_id) from e
        except RepoError as e:
            logger.error(f"Failed to delete workout: {e}")
            raise WorkoutRepoError("Failed to delete workout from database") from e
