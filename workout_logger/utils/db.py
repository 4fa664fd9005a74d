import boto3

from workout_logger.settings import settings

WORKOUTS_PK = "WORKOUTS"
WORKOUT_SK_PREFIX = "WORKOUT#"

COUNTER_PK = "COUNTER"
COUNTER_SK = "WORKOUT"


def get_dynamo_resource():
    return boto3.resource("dynamodb", region_name=settings.REGION)


def get_table():
    resource = get_dynamo_resource()
    return resource.Table(settings.DDB_TABLE_NAME)  # type: ignore


def build_workout_sk(workout_id: int) -> str:
    """
    Sort key for a workout item, zero padded so key order is id order.
    Example: WORKOUT#0000000042
    """
    return f"{WORKOUT_SK_PREFIX}{workout_id:010d}"


def build_workout_key(workout_id: int) -> dict:
    return {"PK": WORKOUTS_PK, "SK": build_workout_sk(workout_id)}


def build_counter_key() -> dict:
    """
    Key of the item holding the last issued workout id.
    """
    return {"PK": COUNTER_PK, "SK": COUNTER_SK}
