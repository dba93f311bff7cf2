"""
Pydantic models for request/response validation.

Wire names are camelCase; database rows use snake_case column names, so every
model accepts either and serializes by alias.
"""
from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List, Dict, Any, Literal
from datetime import datetime
from uuid import UUID


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RequestModel(ApiModel):
    """Request bodies reject fields they do not declare."""
    model_config = ConfigDict(extra="forbid")

    def to_row(self) -> Dict[str, Any]:
        """Columns for an insert: declared fields that were given a value."""
        return self.model_dump(mode="json", exclude_none=True)

    def to_patch(self) -> Dict[str, Any]:
        """Columns for a partial update: only fields present in the request."""
        return self.model_dump(mode="json", exclude_unset=True)


def reject_null(value):
    """Partial updates may omit a required column but never null it."""
    if value is None:
        raise ValueError("must not be null")
    return value


# --- Image types ---

class CreateImageTypeRequest(RequestModel):
    """Request payload for POST /image-types."""
    label: str = Field(..., max_length=255, description='User-facing label (e.g., "2D Floor Plan")')
    value: str = Field(..., max_length=255, description='Internal value key (e.g., "floor_plan_2d")')
    description: Optional[str] = Field(None, description="Optional description shown in the UI")


class UpdateImageTypeRequest(RequestModel):
    label: Optional[str] = Field(None, max_length=255)
    value: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None

    @field_validator("label", "value", mode="before")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class ImageTypeResponse(ApiModel):
    id: str
    label: str
    value: str
    description: Optional[str] = None


# --- Styles ---

class CreateStyleRequest(RequestModel):
    """Request payload for POST /styles."""
    name: str = Field(..., max_length=255, description='User-facing name (e.g., "Modern")')
    thumbnail_url: HttpUrl = Field(..., description="Thumbnail URL displayed in the UI")
    prompt_fragment: str = Field(..., description="Prompt fragment sent to the AI when this style is chosen")
    image_type_ids: Optional[List[UUID]] = Field(None, description="Image type IDs this style applies to")


class UpdateStyleRequest(RequestModel):
    name: Optional[str] = Field(None, max_length=255)
    thumbnail_url: Optional[HttpUrl] = None
    prompt_fragment: Optional[str] = None
    image_type_ids: Optional[List[UUID]] = None

    @field_validator("name", "thumbnail_url", "prompt_fragment", mode="before")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class StyleResponse(ApiModel):
    id: str
    name: str
    thumbnail_url: str
    prompt_fragment: str
    image_type_ids: List[str] = []
    image_types: List[ImageTypeResponse] = []


# --- Projects ---

class CreateProjectRequest(RequestModel):
    name: str = Field(..., max_length=255, description="Project name chosen by the user")

    model_config = ConfigDict(json_schema_extra={"example": {"name": "Downtown Loft Floor Plan"}})


class UpdateProjectRequest(RequestModel):
    name: Optional[str] = Field(None, max_length=255)

    @field_validator("name", mode="before")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class ProjectResponse(ApiModel):
    id: str
    name: str
    user_id: str
    created_at: Optional[datetime] = None


# --- Input images ---

class CreateInputImageRequest(RequestModel):
    url: HttpUrl = Field(..., description="Cloud storage URL pointing to the uploaded file")


class InputImageResponse(ApiModel):
    id: str
    url: str
    user_id: str
    created_at: Optional[datetime] = None


class UrlResponse(ApiModel):
    url: str


# --- Render configs ---

class RenderConfigFields(RequestModel):
    style_id: Optional[UUID] = Field(None, description="Optional style ID chosen by the user")
    custom_instructions: Optional[str] = Field(None, description="Additional custom instructions")
    color_primary_hex: Optional[str] = Field(None, max_length=8)
    color_secondary_hex: Optional[str] = Field(None, max_length=8)
    color_neutral_hex: Optional[str] = Field(None, max_length=8)
    perspective_angle: Optional[int] = Field(None, description="Perspective angle in degrees")
    perspective_x: Optional[int] = None
    perspective_y: Optional[int] = None


class CreateRenderConfigRequest(RenderConfigFields):
    """Request payload for POST /render-configs."""
    project_id: UUID = Field(..., description="Project ID this job belongs to")
    input_image_id: UUID = Field(..., description="Input image ID for the render")
    image_type_id: UUID = Field(..., description="Image type ID describing the source")


class UpdateRenderConfigRequest(RenderConfigFields):
    project_id: Optional[UUID] = None
    input_image_id: Optional[UUID] = None
    image_type_id: Optional[UUID] = None

    @field_validator("project_id", "input_image_id", "image_type_id", mode="before")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class RenderConfigResponse(ApiModel):
    id: str
    project_id: str
    input_image_id: str
    image_type_id: str
    style_id: Optional[str] = None
    custom_instructions: Optional[str] = None
    color_primary_hex: Optional[str] = None
    color_secondary_hex: Optional[str] = None
    color_neutral_hex: Optional[str] = None
    perspective_angle: Optional[int] = None
    perspective_x: Optional[int] = None
    perspective_y: Optional[int] = None
    created_at: Optional[datetime] = None


class GenerationStatusResponse(ApiModel):
    """Polled result of an asynchronous render job."""
    id: str
    status: Literal["pending", "processing", "completed", "failed"]
    output_image_url: Optional[str] = None
    error_message: Optional[str] = None


# --- Project templates ---

class CreateProjectTemplateRequest(RequestModel):
    title: str = Field(..., max_length=255, description="Template card title")
    description: Optional[str] = None
    thumbnail_url: HttpUrl
    original_thumbnail_url: Optional[HttpUrl] = Field(None, description='Original "before" thumbnail')
    generated_thumbnail_url: Optional[HttpUrl] = Field(None, description='AI-generated "after" thumbnail')
    sample_image_urls: List[HttpUrl]
    default_image_type_id: UUID
    default_style_id: Optional[UUID] = None
    generation_options: Optional[Dict[str, Any]] = None

    @field_validator("original_thumbnail_url", "generated_thumbnail_url", mode="before")
    @classmethod
    def blank_as_missing(cls, value):
        return None if value == "" else value


class ProjectTemplateResponse(ApiModel):
    id: str
    title: str
    description: Optional[str] = None
    thumbnail_url: str
    original_thumbnail_url: Optional[str] = None
    generated_thumbnail_url: Optional[str] = None
    sample_image_urls: List[str] = []
    default_image_type_id: str
    default_style_id: Optional[str] = None
    generation_options: Optional[Dict[str, Any]] = None


# --- Users and sessions ---

class UserResponse(ApiModel):
    id: str
    email: str
    name: Optional[str] = None


class SessionUser(ApiModel):
    id: str
    email: Optional[str] = None
    name: str = ""


class SessionInfo(ApiModel):
    id: str
    expires_at: Optional[datetime] = None


class UserSession(ApiModel):
    """Session resolved from a request's bearer token."""
    session: SessionInfo
    user: SessionUser


class SignInRequest(ApiModel):
    email: str
    password: str


class SignUpRequest(ApiModel):
    name: str
    email: str
    password: str


class SocialLoginRequest(ApiModel):
    provider: str
    id_token: str
    nonce: Optional[str] = None


class AuthResponse(ApiModel):
    token: str
    user: SessionUser


class HealthResponse(BaseModel):
    """Response for /health endpoint."""
    status: str = "ok"
    version: str = "1.0.0"
