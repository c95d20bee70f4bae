from __future__ import annotations

from typing import Any, Sequence

from fastapi import HTTPException


class BadRequestError(HTTPException):
    """Client input error raised before the data store is touched."""

    def __init__(self, message: str, errors: Sequence[Any] | None = None):
        self.message = message
        self.errors = list(errors or [])
        super().__init__(status_code=400, detail={"message": message, "errors": self.errors})
