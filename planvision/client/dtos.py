"""
Wire-format records exchanged with the backend, and their domain mappers.
"""
from typing import Optional, List, Dict, Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from planvision.client.domain import (
    AuthUser,
    GenerationState,
    GenerationStatus,
    ImageType,
    ProjectTemplate,
    Style,
    parse_url,
)


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EmptyResponse(WireModel):
    pass


# --- Auth ---

class UserDTO(WireModel):
    id: str
    # phone and anonymous Supabase users have no email
    email: Optional[str] = None
    name: str = ""

    def to_domain(self) -> AuthUser:
        return AuthUser(id=self.id, name=self.name, email=self.email or "")


class AuthResponseDTO(WireModel):
    token: str
    user: UserDTO


class SessionDataDTO(WireModel):
    id: str
    expires_at: Optional[str] = None


class SessionResponseDTO(WireModel):
    session: SessionDataDTO
    user: UserDTO


# --- Catalogue ---

class ImageTypeDTO(WireModel):
    id: str
    label: str
    value: str
    description: Optional[str] = None

    def to_domain(self) -> ImageType:
        return ImageType(
            id=self.id,
            label=self.label,
            value=self.value,
            description=self.description or "",
        )


class StyleDTO(WireModel):
    id: str
    name: str
    thumbnail_url: str
    prompt_fragment: str
    image_types: Optional[List[ImageTypeDTO]] = None

    def to_domain(self) -> Style:
        return Style(
            id=self.id,
            name=self.name,
            thumbnail_url=parse_url(self.thumbnail_url),
            prompt_fragment=self.prompt_fragment,
            image_type_ids=[t.id for t in self.image_types or []],
        )


class ProjectTemplateDTO(WireModel):
    id: str
    title: str
    description: Optional[str] = None
    thumbnail_url: str
    original_thumbnail_url: Optional[str] = None
    generated_thumbnail_url: Optional[str] = None
    sample_image_urls: List[str] = []
    default_image_type_id: str

    def to_domain(self) -> ProjectTemplate:
        samples = [parse_url(u) for u in self.sample_image_urls]
        return ProjectTemplate(
            id=self.id,
            title=self.title,
            description=self.description or "",
            thumbnail_url=parse_url(self.thumbnail_url),
            original_thumbnail_url=parse_url(self.original_thumbnail_url),
            generated_thumbnail_url=parse_url(self.generated_thumbnail_url),
            sample_image_urls=[u for u in samples if u is not None],
            default_image_type_id=self.default_image_type_id,
        )


# --- Projects and renders ---

class InputImageDTO(WireModel):
    id: str
    url: str
    user_id: str
    created_at: str


class ProjectResponseDTO(WireModel):
    id: str
    name: str


class CreateRenderConfigDTO(WireModel):
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

    def to_body(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class RenderConfigResponseDTO(WireModel):
    id: str


class GenerationStatusDTO(WireModel):
    id: str
    status: str
    output_image_url: Optional[str] = None
    error_message: Optional[str] = None

    def to_domain(self) -> GenerationStatus:
        return GenerationStatus(
            id=self.id,
            state=GenerationState.parse(self.status),
            output_image_url=parse_url(self.output_image_url),
            error_message=self.error_message,
        )
