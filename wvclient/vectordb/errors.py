from __future__ import annotations

from typing import Any, List


class WeaviateError(Exception):
    """Error payload reported by the remote service."""

    def __init__(
        self,
        status: int | None,
        status_text: str | None,
        errors: List[dict[str, Any]],
    ) -> None:
        self.status = status
        self.status_text = status_text
        self.errors = errors
        super().__init__(self.message)

    @property
    def message(self) -> str:
        if self.errors:
            first = self.errors[0]
            return str(first.get("message", first))
        return self.status_text or "Unknown error"

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "status_text": self.status_text,
            "error": self.message,
        }

    def __str__(self) -> str:
        if self.status is None:
            return self.message
        if self.status_text:
            return f"{self.status} {self.status_text}: {self.message}"
        return f"{self.status}: {self.message}"


__all__ = ["WeaviateError"]
