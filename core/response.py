# core/response.py

from __future__ import annotations

from enum import Enum


class ErrorCode(Enum):
    # === Lookup Misses ===
    # reported by read-only finders; mutations on missing ids are no-ops instead
    NOT_FOUND = "NOT_FOUND"

    # === Validation Failures ===
    # required argument or attribute is missing or blank
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"

    # field value is outside its enumeration or incorrectly formatted
    INVALID_FIELD_VALUE = "INVALID_FIELD_VALUE"

    # === Deserialization Failures ===
    # imported text is not JSON, or not shaped like a tracker document
    DESERIALIZATION_FAILED = "DESERIALIZATION_FAILED"

    # === Internal Faults ===
    # storage medium refused a write, or anything unexpected
    INTERNAL_ERROR = "INTERNAL_ERROR"


class Response:
    """
    Standard Response object for Tracker manipulator and lookup methods.

    Attributes:
        success (bool): Indicates whether the operation succeeded.
        detail (str | None): Optional human-readable explanation.
        error (ErrorCode | str | None): Optional machine-readable error identifier.
        data (dict): Optional payload, varies by operation.
    """

    def __init__(
        self,
        success: bool,
        detail: str | None = None,
        error: ErrorCode | str | None = None,
        data: dict | None = None,
    ):
        self._success = success
        self._detail = detail
        self._error = error
        self._data = data or {}

    # === properties ===

    @property
    def success(self) -> bool:
        return self._success

    @property
    def detail(self) -> str | None:
        return self._detail

    @property
    def error(self) -> ErrorCode | str | None:
        return self._error

    @property
    def data(self) -> dict:
        return self._data

    @property
    def changed(self) -> bool:
        """True if a mutation replaced the tracker document."""
        return bool(self._data.get("changed", False))

    # === public classmethods ===

    @classmethod
    def succeed(cls, detail: str | None = None, data: dict | None = None) -> Response:
        return cls(success=True, detail=detail, error=None, data=data)

    @classmethod
    def fail(
        cls,
        detail: str | None = None,
        error: ErrorCode | str | None = None,
        data: dict | None = None,
    ) -> Response:
        return cls(success=False, detail=detail, error=error, data=data)

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "error": self.error.value if isinstance(self.error, Enum) else self.error,
            "detail": self.detail,
        }

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"Response({self._success}, {self._error}, {self._detail!r})"

    def __str__(self) -> str:
        if self.success:
            return f"Success: {self.detail or ''}"
        else:
            error_str = (
                self.error.value if isinstance(self.error, Enum) else self.error or ""
            )
            return f"Error: {error_str} {self.detail or ''}".rstrip()
