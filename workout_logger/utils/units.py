from workout_logger.models.workout import UnitType, Workout

KM_PER_MILE = 1.60934


def miles_to_km(miles: float) -> float:
    """
    Convert miles to kilometers.

    This function performs a pure mathematical conversion.
    It does not round or format the result.
    """
    return miles * KM_PER_MILE


def km_to_miles(km: float) -> float:
    """
    Convert kilometers to miles.

    This function performs a pure mathematical conversion.
    It does not round or format the result.
    """
    return km / KM_PER_MILE


def convert_workout(workout: Workout, target_unit: UnitType) -> Workout:
    """
    Return the workout expressed in target_unit.

    Already in target_unit: the same object comes back.
    Otherwise a copy is returned with distance and unit replaced.
    """
    if workout.unit == target_unit:
        return workout

    distance = workout.distance or 0.0
    if target_unit == UnitType.KILOMETERS:
        distance = miles_to_km(distance)
    else:
        distance = km_to_miles(distance)

    return workout.model_copy(update={"distance": distance, "unit": target_unit})
