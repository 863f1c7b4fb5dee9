"""Translation of domain errors into HTTP responses"""

import logging

from fastapi import HTTPException

from ..storage.errors import BoardError

logger = logging.getLogger(__name__)


def http_error(error: BoardError) -> HTTPException:
    """Map a domain error to an HTTPException carrying its code and message"""
    if error.status_code >= 500:
        logger.error("[API] %s: %s", error.code, error)
    return HTTPException(
        status_code=error.status_code,
        detail={"code": error.code, "message": str(error)},
    )
