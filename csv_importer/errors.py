"""
Exception classes for the import flow.

Every failure is terminal for the current attempt: the UI shows ``message``
and the user re-triggers the action.
"""

from typing import Any, Optional

from csv_importer import messages


class CsvImportError(Exception):
    """
    Base exception for all import errors.

    Attributes:
        code: Error code (e.g., "INVALID_STRUCTURE")
        message: Human-readable message shown to the user
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
            }
        }


class UploadRejectedError(CsvImportError):
    """Uploaded file refused before parsing."""

    def __init__(self, reason: str, filename: str = ""):
        super().__init__(
            code="UPLOAD_REJECTED",
            message=messages.FILE_REJECTED.format(reason=reason),
            details={"filename": filename, "reason": reason}
        )


class CsvParseError(CsvImportError):
    """Uploaded bytes are not a readable CSV (bad encoding, unterminated quote)."""

    def __init__(self, reason: str, line: Optional[int] = None):
        details = {"reason": reason}
        if line is not None:
            details["line"] = line
        super().__init__(
            code="CSV_PARSE_ERROR",
            message=messages.UNABLE_TO_LOAD.format(reason=reason),
            details=details
        )


class StructuralValidationError(CsvImportError):
    """No data rows, or a row width that does not match the selector count."""

    def __init__(self, details: Optional[dict] = None):
        super().__init__(
            code="INVALID_STRUCTURE",
            message=messages.INVALID_STRUCTURE,
            details=details
        )


class IncompleteMappingError(CsvImportError):
    """A selector has no resolvable value."""

    def __init__(self, columns: list[int]):
        super().__init__(
            code="INCOMPLETE_MAPPING",
            message=messages.INCOMPLETE_MAPPING,
            details={"columns": columns}
        )


class EmptyResultError(CsvImportError):
    """Every row was dropped as unpopulated."""

    def __init__(self, row_count: int = 0):
        super().__init__(
            code="EMPTY_RESULT",
            message=messages.NO_VALID_DATA,
            details={"rows": row_count}
        )


class PersistenceError(CsvImportError):
    """The batch save failed as a whole."""

    def __init__(self, reason: str):
        super().__init__(
            code="PERSISTENCE_ERROR",
            message=messages.SAVE_FAILED.format(reason=reason),
            details={"reason": reason}
        )
