"""Error kinds raised by the ordering engine and the use-case services"""

from typing import Optional


class BoardError(Exception):
    """Base class for all taskboard domain errors

    ``code`` is a stable machine-readable identifier and ``status_code`` the
    HTTP-equivalent outcome the API layer reports.
    """

    code = "INTERNAL_001"
    status_code = 500

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        if code is not None:
            self.code = code


class NotFoundError(BoardError):
    """A sibling, parent, or related record is missing (or was deleted concurrently)"""

    code = "NOT_FOUND_001"
    status_code = 404


class OutOfRangeError(BoardError):
    """A requested order lies outside the valid range for its parent"""

    code = "ORDER_001"
    status_code = 400


class CrossBoundaryError(BoardError):
    """A cross-parent move between parents of different aggregates"""

    code = "TASK_002"
    status_code = 400


class StoreConflictError(BoardError):
    """The store aborted the transaction; the whole operation may be retried"""

    code = "STORE_001"
    status_code = 409


class AccessDeniedError(BoardError):
    code = "BOARD_002"
    status_code = 403


class InvalidInputError(BoardError):
    code = "VAL_001"
    status_code = 400


class ColumnNotEmptyError(BoardError):
    code = "COLUMN_002"
    status_code = 409


# Per-entity NotFound codes
BOARD_NOT_FOUND = "BOARD_001"
COLUMN_NOT_FOUND = "COLUMN_001"
TASK_NOT_FOUND = "TASK_001"
USER_NOT_FOUND = "USER_001"
