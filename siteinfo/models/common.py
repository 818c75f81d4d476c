from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """``{"code", "message", "data"}`` wrapper used by every site-info response."""

    code: int
    message: str
    data: T | None = None
