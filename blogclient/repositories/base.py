# blogclient/repositories/base.py
import logging
from typing import Any, TypeVar

import httpx
from postgrest.exceptions import APIError
from pydantic import BaseModel, ValidationError

from blogclient.core.errors import StoreError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

# Postgres unique_violation
UNIQUE_VIOLATION = "23505"


async def run_query(query: Any, error: type[StoreError], action: str) -> list[dict[str, Any]]:
    """
    Execute a PostgREST query and return its rows.

    Args:
        query: a built (not yet executed) Supabase query
        error: StoreReadFailure or StoreWriteFailure, raised on failure
        action: short description used in logs and error messages

    Raises:
        `error`: when PostgREST rejects the query or the transport fails.
            The original exception is chained.
    """
    try:
        response = await query.execute()
    except APIError as exc:
        logger.error("%s failed: [%s] %s", action, exc.code, exc.message)
        raise error(f"{action} failed: {exc.message}") from exc
    except httpx.HTTPError as exc:
        logger.error("%s failed: %s", action, exc)
        raise error(f"{action} failed: {exc}") from exc

    if response is None:
        return []
    return response.data or []


def parse_row(model: type[M], row: dict[str, Any], error: type[StoreError], action: str) -> M:
    """
    Validate one raw row into `model`.

    Raises:
        `error`: when the row does not match the schema. Raw rows never
            leave the repository layer.
    """
    try:
        return model.model_validate(row)
    except ValidationError as exc:
        logger.error("%s returned a malformed row: %s", action, exc.errors()[:1])
        raise error(f"{action} failed: malformed row") from exc
