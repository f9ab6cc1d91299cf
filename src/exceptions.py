from __future__ import annotations

from typing import Any


class AppError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code = 500

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class ValidationError(AppError):
    status_code = 400

    def __init__(self, issues: list[dict[str, Any]], detail: str = "Validation failed") -> None:
        super().__init__(detail)
        self.issues = issues

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        return cls([{"field": field, "message": message}])

    @classmethod
    def from_pydantic(cls, errors: list[dict[str, Any]]) -> "ValidationError":
        """Build from pydantic/FastAPI ``errors()`` output."""

        issues = []
        for err in errors:
            # Drop the "body" / "query" prefix FastAPI adds to request locations.
            loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
            issues.append({"field": ".".join(loc) or None, "message": err.get("msg", "Invalid value")})
        return cls(issues)


class ConflictError(AppError):
    status_code = 409


class NotFoundError(AppError):
    status_code = 404
