from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class MaskRequest(BaseModel):
    value: str | None = None
    pattern: str | None = None
    pattern_name: str | None = None
    masking_character: str | None = Field(default=None, min_length=1, max_length=1)


class MaskResponse(BaseModel):
    status: str
    result: str | None = None
    reason: str | None = None


class CensorRequest(BaseModel):
    """Untyped document censored through the configured key directives."""

    document: dict[str, Any]


class CensorResponse(BaseModel):
    status: str = "ok"
    document: dict[str, Any]
