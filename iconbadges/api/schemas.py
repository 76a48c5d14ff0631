"""Pydantic schemas for API requests and responses."""
from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict


class IconRecordSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    slug: str
    type: str
    data: str


class IconListResponse(BaseModel):
    icons: list[IconRecordSchema]


class IconSubmission(BaseModel):
    # Optional so a missing field reaches the workflow and yields the 400 envelope.
    slug: str | None = None
    type: str | None = None
    data: str | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> "IconSubmission":
        """Keep only string fields; any other JSON body counts as empty."""
        if not isinstance(payload, dict):
            return cls()
        fields = {}
        for name in ("slug", "type", "data"):
            value = payload.get(name)
            if isinstance(value, str):
                fields[name] = value
        return cls(**fields)


class SubmissionResponse(BaseModel):
    type: Literal["success"] = "success"
    message: str = "Your icon has been added successfully."
    body: IconRecordSchema


class ErrorResponse(BaseModel):
    type: Literal["error"] = "error"
    message: str
    body: Any = None


class HealthResponse(BaseModel):
    status: str
