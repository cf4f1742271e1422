"""
AI provider status models.

Sandi Metz Principles:
- Small classes with clear purpose
- Clear naming conventions
"""

from pydantic import BaseModel, ConfigDict, Field


class ProviderStatus(BaseModel):
    """Availability snapshot of one registered provider."""

    name: str = Field(..., description="Provider display name")
    available: bool = Field(..., description="Enabled and credential present")
    key: str = Field(..., description="Registry key")


class ProviderTestResult(BaseModel):
    """Outcome of a provider smoke test."""

    provider: str = Field(..., description="Registry key")
    success: bool = Field(..., description="Whether the smoke test passed")
    message: str = Field(..., description="Human readable outcome")


class ModelSelection(BaseModel):
    """Active model of a provider."""

    model_config = ConfigDict(protected_namespaces=())

    provider: str = Field(..., description="Registry key")
    model_key: str = Field(..., description="Active model alias")
    model: str = Field(..., description="Active model name")
