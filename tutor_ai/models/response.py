"""
API request and response models.

Sandi Metz Principles:
- Single Responsibility: HTTP payload shapes
- Clear naming: Descriptive field names
"""

from typing import Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field

from tutor_ai.models.provider import ProviderStatus


class HealthResponse(BaseModel):
    """Health check response."""

    status: Literal["healthy", "unhealthy", "degraded"] = Field(
        ..., description="Service status"
    )
    environment: str = Field(..., description="Environment name")
    version: str = Field(..., description="Application version")
    store: Literal["up", "down"] = Field(..., description="Redis reachability")


class ProviderStatusResponse(BaseModel):
    """Availability of every provider plus the fallback order."""

    providers: Dict[str, ProviderStatus] = Field(..., description="Status by key")
    priority: List[str] = Field(..., description="Fallback order")


class ModelUpdateRequest(BaseModel):
    """Request to switch a provider's active model."""

    model_config = ConfigDict(protected_namespaces=())

    model_key: str = Field(..., min_length=1, description="Model alias")


class CacheInvalidationResponse(BaseModel):
    """Outcome of a cache category invalidation."""

    category: str = Field(..., description="Invalidated category")
    invalidated: int = Field(..., ge=0, description="Entries removed")


class ErrorResponse(BaseModel):
    """Error payload."""

    error: str = Field(..., description="Error type")
    detail: str = Field(..., description="Error message")
