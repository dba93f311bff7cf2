"""
In-memory domain types the client works with, built from wire DTOs.
"""
import enum
from dataclasses import dataclass, field
from typing import Optional, List

from pydantic import AnyUrl, TypeAdapter, ValidationError

_url_adapter = TypeAdapter(AnyUrl)


def parse_url(value: Optional[str]) -> Optional[AnyUrl]:
    """Parse a URL string; malformed or missing values become None."""
    if not value:
        return None
    try:
        return _url_adapter.validate_python(value)
    except ValidationError:
        return None


@dataclass(frozen=True)
class AuthUser:
    id: str
    name: str
    email: str


@dataclass(frozen=True)
class ImageType:
    id: str
    label: str
    value: str
    description: str


@dataclass(frozen=True)
class Style:
    id: str
    name: str
    thumbnail_url: Optional[AnyUrl]
    prompt_fragment: str
    image_type_ids: List[str] = field(default_factory=list)

    def applies_to(self, image_type_id: Optional[str]) -> bool:
        """
        True if this style can be used with the given image type.

        No image type means no filter; styles linked to no image types are
        universal.
        """
        if image_type_id is None:
            return True
        return not self.image_type_ids or image_type_id in self.image_type_ids


@dataclass(frozen=True)
class ProjectTemplate:
    id: str
    title: str
    description: str
    thumbnail_url: Optional[AnyUrl]
    original_thumbnail_url: Optional[AnyUrl]
    generated_thumbnail_url: Optional[AnyUrl]
    sample_image_urls: List[AnyUrl]
    default_image_type_id: str

    @property
    def has_comparison_images(self) -> bool:
        """Both the original and the generated thumbnail are available."""
        return self.original_thumbnail_url is not None and self.generated_thumbnail_url is not None


class GenerationState(str, enum.Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @classmethod
    def parse(cls, value: str) -> "GenerationState":
        try:
            return cls(value)
        except ValueError:
            return cls.PENDING


@dataclass(frozen=True)
class GenerationStatus:
    id: str
    state: GenerationState
    output_image_url: Optional[AnyUrl] = None
    error_message: Optional[str] = None

    @property
    def is_finished(self) -> bool:
        return self.state in (GenerationState.COMPLETED, GenerationState.FAILED)
