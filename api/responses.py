"""
Standardized API response models and utilities.
Mirrors the `{success, message, data}` envelope the storefront expects.
"""

from typing import Generic, TypeVar, Optional
from pydantic import BaseModel, Field
from datetime import datetime, timezone

T = TypeVar("T")


def _now() -> datetime:
    return datetime.now(timezone.utc)


class APIResponse(BaseModel, Generic[T]):
    """Generic API response wrapper"""

    success: bool = Field(..., description="Indicates if the operation was successful")
    message: Optional[str] = Field(None, description="Human-readable message")
    data: Optional[T] = Field(None, description="Response payload")
    timestamp: datetime = Field(default_factory=_now, description="Response timestamp")

    model_config = {"from_attributes": True}


class HealthResponse(BaseModel):
    """Health check response"""

    status: str = Field(..., description="Service status")
    service: str = Field(..., description="Service name")
    version: Optional[str] = Field(None, description="Service version")
    timestamp: datetime = Field(default_factory=_now, description="Check timestamp")

