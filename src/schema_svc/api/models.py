"""
Pydantic models for the schema API.

Views themselves are free-form JSON; these models cover the fixed-shape
responses.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class VersionResponse(BaseModel):
    """Schema version."""

    model_config = ConfigDict(json_schema_extra={"example": {"version": "1.1.0"}})

    version: str = Field(..., description="Schema version (SemVer)")


class ExtensionModel(BaseModel):
    """A schema extension."""

    name: str = Field(..., description="Extension name")
    uid: int | None = Field(None, description="Extension unique identifier")
    caption: str = Field("", description="Human-readable name")
    description: str = Field("", description="Description")
    version: str | None = Field(None, description="Extension version")


class ProfileModel(BaseModel):
    """A schema profile."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "host",
                "caption": "Host",
                "description": "Attributes of the reporting device",
                "attributes": ["device"],
            }
        }
    )

    name: str = Field(..., description="Profile name (extension-scoped)")
    caption: str = Field("", description="Human-readable name")
    description: str = Field("", description="Description")
    extension: str | None = Field(None, description="Contributing extension")
    attributes: list[str] = Field(default_factory=list, description="Attributes added by the profile")


class ErrorResponse(BaseModel):
    error: str
    detail: str | None = None


class HealthResponse(BaseModel):
    status: str
    version: str
    catalog: dict[str, Any]
