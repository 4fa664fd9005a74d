from typing import Any, Dict, Generic, List, TypeVar

from botocore.exceptions import ClientError

from workout_logger.repositories.errors import RepoConditionError, RepoError
from workout_logger.utils.log import logger

T = TypeVar("T")

CONDITION_FAILED = "ConditionalCheckFailedException"


def _error_code(e: ClientError) -> str | None:
    return e.response.get("Error", {}).get("Code")


class DynamoRepository(Generic[T]):
    """
    Base class for DynamoDB repositories with common query/error handling.
    """

    def __init__(self, table=None):
        from workout_logger.utils import db

        self._table = table or db.get_table()

    def _to_model(self, item: dict) -> T:
        """This should be overridden in subclasses"""
        raise NotImplementedError

    def _safe_query(self, **kwargs) -> List[dict]:
        """Execute query, following pagination, and handle ClientError"""
        items: List[dict] = []
        try:
            while True:
                response = self._table.query(**kwargs)
                items.extend(response.get("Items", []))
                last_key = response.get("LastEvaluatedKey")
                if not last_key:
                    return items
                kwargs["ExclusiveStartKey"] = last_key
        except ClientError as e:
            logger.exception("DynamoDB query failed")
            raise RepoError("Failed to query database") from e

    def _safe_put(self, item: dict, **kwargs) -> None:
        """Put item, a rejected ConditionExpression raises RepoConditionError"""
        try:
            self._table.put_item(Item=item, **kwargs)
        except ClientError as e:
            if _error_code(e) == CONDITION_FAILED:
                raise RepoConditionError("Conditional put rejected") from e
            logger.exception("DynamoDB put_item failed")
            raise RepoError("Failed to write to database") from e

    def _safe_update(self, **kwargs) -> Dict[str, Any]:
        try:
            return self._table.update_item(**kwargs)
        except ClientError as e:
            logger.exception("DynamoDB update_item failed")
            raise RepoError("Failed to update database") from e

    def _safe_get(self, **kwargs) -> dict | None:
        try:
            resp = self._table.get_item(**kwargs)
            return resp.get("Item")
        except ClientError as e:
            logger.exception("DynamoDB get_item failed")
            raise RepoError("Failed to read from database") from e

    def _safe_delete(self, **kwargs) -> None:
        try:
            self._table.delete_item(**kwargs)
        except ClientError as e:
            if _error_code(e) == CONDITION_FAILED:
                raise RepoConditionError("Conditional delete rejected") from e
            logger.exception("DynamoDB delete_item failed")
            raise RepoError("Failed to delete from database") from e
