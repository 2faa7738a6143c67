"""Wire models for the tutorial resource."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Tutorial(BaseModel):
    """Stored tutorial document as returned to clients."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=lambda: uuid4().hex)
    title: str
    description: Optional[str] = None
    published: bool = False
    created_at: datetime = Field(default_factory=_now, alias="createdAt")
    updated_at: datetime = Field(default_factory=_now, alias="updatedAt")

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class TutorialCreate(BaseModel):
    # title stays optional here so a missing title is reported as a 400
    # by the service instead of a 422 from request parsing
    title: Optional[str] = None
    description: Optional[str] = None
    # null is accepted and stored as false
    published: Optional[bool] = None


class TutorialUpdate(BaseModel):
    """Sparse update; only the fields a client sends are applied."""

    title: Optional[str] = None
    description: Optional[str] = None
    published: Optional[bool] = None

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class MutationResult(BaseModel):
    message: str
    count: int
