class RepoError(Exception):
    """Base class for repository-level errors."""

    pass


class WorkoutRepoError(RepoError):
    """Generic workout repository error."""

    pass


class WorkoutNotFoundError(WorkoutRepoError):
    """Raised when no workout exists for the given id."""

    def __init__(self, workout_id: int):
        self.workout_id = workout_id
        super().__init__(f"Workout with ID {workout_id} not found.")


class RepoConditionError(RepoError):
    """Raised when a conditional write is rejected by the table."""

    pass
