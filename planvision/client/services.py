"""
Client-side services wrapping the backend endpoints.

Every call raises a ``NetworkError`` subclass on failure.
"""
import logging
from typing import List, Optional

from planvision.client import endpoints
from planvision.client.domain import AuthUser, GenerationStatus, ImageType, ProjectTemplate, Style
from planvision.client.dtos import (
    AuthResponseDTO,
    CreateRenderConfigDTO,
    EmptyResponse,
    GenerationStatusDTO,
    ImageTypeDTO,
    InputImageDTO,
    ProjectResponseDTO,
    ProjectTemplateDTO,
    RenderConfigResponseDTO,
    SessionResponseDTO,
    StyleDTO,
)
from planvision.client.endpoints import Endpoint
from planvision.client.http_client import HTTPClient

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, http: HTTPClient):
        self.http = http

    @property
    def token_store(self):
        return self.http.token_store

    async def _authenticate(self, endpoint: Endpoint) -> AuthUser:
        response: AuthResponseDTO = await self.http.send_request(endpoint, AuthResponseDTO)
        self.token_store.save(response.token)
        logger.info(f"✅ Authenticated {response.user.email}")
        return response.user.to_domain()

    async def sign_in(self, email: str, password: str) -> AuthUser:
        return await self._authenticate(endpoints.sign_in(email, password))

    async def sign_up(self, name: str, email: str, password: str) -> AuthUser:
        return await self._authenticate(endpoints.sign_up(name, email, password))

    async def social_login(self, provider: str, id_token: str, nonce: str) -> AuthUser:
        return await self._authenticate(endpoints.social_login(provider, id_token, nonce))

    async def sign_out(self) -> None:
        await self.http.send_request(endpoints.sign_out(), EmptyResponse)
        self.token_store.delete()

    async def fetch_session(self) -> AuthUser:
        response: SessionResponseDTO = await self.http.send_request(endpoints.get_session(), SessionResponseDTO)
        return response.user.to_domain()


class HomeService:
    """Catalogue data for the home screen."""

    def __init__(self, http: HTTPClient):
        self.http = http

    async def fetch_templates(self) -> List[ProjectTemplate]:
        dtos = await self.http.send_request(endpoints.get_templates(), List[ProjectTemplateDTO])
        return [dto.to_domain() for dto in dtos]

    async def fetch_image_types(self) -> List[ImageType]:
        dtos = await self.http.send_request(endpoints.get_image_types(), List[ImageTypeDTO])
        return [dto.to_domain() for dto in dtos]

    async def fetch_styles(self, image_type_id: Optional[str] = None) -> List[Style]:
        dtos = await self.http.send_request(endpoints.get_styles(image_type_id), List[StyleDTO])
        return [dto.to_domain() for dto in dtos]


class ProjectService:
    def __init__(self, http: HTTPClient):
        self.http = http

    async def create_project(self, name: str) -> ProjectResponseDTO:
        return await self.http.send_request(endpoints.create_project(name), ProjectResponseDTO)

    async def create_render_config(self, dto: CreateRenderConfigDTO) -> RenderConfigResponseDTO:
        return await self.http.send_request(endpoints.create_render_config(dto.to_body()), RenderConfigResponseDTO)

    async def get_generation_status(self, config_id: str) -> GenerationStatus:
        dto = await self.http.send_request(endpoints.get_generation_status(config_id), GenerationStatusDTO)
        return dto.to_domain()


class InputImageService:
    def __init__(self, http: HTTPClient):
        self.http = http

    async def upload_image(self, data: bytes) -> InputImageDTO:
        """Upload JPEG bytes as a new input image."""
        return await self.http.send_request(endpoints.upload_input_image(data), InputImageDTO)

    async def register_image(self, url: str) -> InputImageDTO:
        """Register an already hosted image, e.g. a template sample."""
        return await self.http.send_request(endpoints.register_input_image(url), InputImageDTO)
