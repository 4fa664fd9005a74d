import pytest
from botocore.exceptions import ClientError

from workout_logger.utils import db

# ─────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────


def _client_error(
    op_name: str, *, code: str = "500", message: str | None = None
) -> ClientError:
    """
    Build a botocore ClientError for unit tests.
    """
    msg = message or f"Boom in {op_name}"
    return ClientError(
        error_response={"Error": {"Code": code, "Message": msg}},
        operation_name=op_name,
    )


@pytest.fixture
def client_error():
    """
    Fixture returning a helper function to build ClientError instances.
    Usage:
        err = client_error("Query")
    """
    return _client_error


# ─────────────────────────────────────────────────────────────
# Fake DynamoDB Table
# ─────────────────────────────────────────────────────────────


OP_NAMES = {
    "query": "Query",
    "get_item": "GetItem",
    "put_item": "PutItem",
    "update_item": "UpdateItem",
    "delete_item": "DeleteItem",
}


class FakeTable:
    """
    A small in-memory stand-in for a boto3 DynamoDB Table.

    - items are kept by (PK, SK)
    - `attribute_exists(PK)` / `attribute_not_exists(PK)` conditions are honoured
    - `update_item` supports the counter `ADD #count :inc` used for ids
    - `query` returns every workout item in SK order, `page_size` splits pages
    - `fail_on`: set of operation names that should raise ClientError
    """

    def __init__(self, *, fail_on: set[str] | None = None, page_size: int | None = None):
        self.items: dict[tuple[str, str], dict] = {}
        self.fail_on: set[str] = set(fail_on or [])
        self.page_size = page_size

        self.query_calls: list[dict] = []
        self.last_put_kwargs: dict | None = None
        self.last_delete_kwargs: dict | None = None

    def _maybe_fail(self, op: str):
        if op in self.fail_on or OP_NAMES[op] in self.fail_on:
            raise _client_error(OP_NAMES[op])

    def _check_condition(self, op: str, key: tuple[str, str], condition: str | None):
        exists = key in self.items
        if condition == "attribute_exists(PK)" and not exists:
            raise _client_error(OP_NAMES[op], code="ConditionalCheckFailedException")
        if condition == "attribute_not_exists(PK)" and exists:
            raise _client_error(OP_NAMES[op], code="ConditionalCheckFailedException")

    def query(self, **kwargs):
        self._maybe_fail("query")
        self.query_calls.append(dict(kwargs))

        workouts = sorted(
            (item for (pk, _), item in self.items.items() if pk == db.WORKOUTS_PK),
            key=lambda item: item["SK"],
        )
        start = kwargs.get("ExclusiveStartKey", {}).get("offset", 0)
        if self.page_size is None:
            return {"Items": workouts[start:]}

        end = start + self.page_size
        response = {"Items": workouts[start:end]}
        if end < len(workouts):
            response["LastEvaluatedKey"] = {"offset": end}
        return response

    def get_item(self, **kwargs):
        self._maybe_fail("get_item")
        key = kwargs["Key"]
        item = self.items.get((key["PK"], key["SK"]))
        return {"Item": dict(item)} if item else {}

    def put_item(self, **kwargs):
        self._maybe_fail("put_item")
        self.last_put_kwargs = kwargs
        item = kwargs["Item"]
        key = (item["PK"], item["SK"])
        self._check_condition("put_item", key, kwargs.get("ConditionExpression"))
        self.items[key] = dict(item)
        return {}

    def update_item(self, **kwargs):
        self._maybe_fail("update_item")
        key = kwargs["Key"]
        item = self.items.setdefault((key["PK"], key["SK"]), {**key, "count": 0})
        item["count"] += kwargs["ExpressionAttributeValues"][":inc"]
        return {"Attributes": {"count": item["count"]}}

    def delete_item(self, **kwargs):
        self._maybe_fail("delete_item")
        self.last_delete_kwargs = kwargs
        key = (kwargs["Key"]["PK"], kwargs["Key"]["SK"])
        self._check_condition("delete_item", key, kwargs.get("ConditionExpression"))
        self.items.pop(key, None)
        return {}


# ─────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────


@pytest.fixture
def fake_table() -> FakeTable:
    return FakeTable()


@pytest.fixture
def paged_table() -> FakeTable:
    return FakeTable(page_size=2)


@pytest.fixture
def failing_table_factory():
    """
    Usage:
        table = failing_table_factory("query")
    """

    def _make(*ops: str) -> FakeTable:
        return FakeTable(fail_on=set(ops))

    return _make


@pytest.fixture
def bad_items_table() -> FakeTable:
    """
    Returns malformed Items for parse-error tests.
    """
    table = FakeTable()
    table.items[(db.WORKOUTS_PK, db.build_workout_sk(1))] = {
        **db.build_workout_key(1),
        "type": "workout",
    }
    return table
