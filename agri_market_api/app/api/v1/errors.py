"""
Error translation shared by the endpoint modules.

Storage reports a missing row through ``None``/``False``; endpoints
turn that into 404 themselves.  Anything the storage layer raises
(constraint violations, driver errors) is logged with its traceback
and answered with a generic 500 carrying ``message``.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import HTTPException, status

logger = logging.getLogger(__name__)


@contextmanager
def storage_errors(message: str) -> Iterator[None]:
    try:
        yield
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("API error: %s", message)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message
        ) from e


def not_found(entity: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{entity} not found")
