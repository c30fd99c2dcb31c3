from __future__ import annotations

from typing import Any


class StorageValidationError(ValueError):
    """A write violated a storage constraint. Raised on the first failing field."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class InputValidationError(ValueError):
    """An external payload failed validation. ``errors`` lists every violation."""

    def __init__(self, errors: list[dict[str, Any]]):
        self.errors = errors
        summary = "; ".join(f"{e['path']}: {e['message']}" for e in errors)
        super().__init__(f"Invalid student payload ({len(errors)} errors): {summary}")

    @property
    def paths(self) -> list[str]:
        return [e["path"] for e in self.errors]
