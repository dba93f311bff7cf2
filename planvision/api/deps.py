"""
FastAPI dependencies wiring route handlers to services.

Collaborators (repositories, storage, auth provider) live on ``app.state`` so
``create_app`` can swap them.
"""
from fastapi import Depends, Request

from planvision.services.auth import SupabaseAuthProvider
from planvision.services.generations import GenerationService
from planvision.services.image_types import ImageTypeService
from planvision.services.input_images import InputImageService
from planvision.services.project_templates import ProjectTemplateService
from planvision.services.projects import ProjectService
from planvision.services.render_configs import RenderConfigService
from planvision.services.repository import RepositoryFactory
from planvision.services.storage import StorageService, get_storage_service
from planvision.services.styles import StyleService
from planvision.services.users import UserService


def get_repositories(request: Request) -> RepositoryFactory:
    return request.app.state.repositories


def get_storage(request: Request) -> StorageService:
    storage = request.app.state.storage
    if storage is None:
        storage = request.app.state.storage = get_storage_service()
    return storage


def get_auth_provider(request: Request) -> SupabaseAuthProvider:
    return request.app.state.auth_provider


def get_image_type_service(repositories: RepositoryFactory = Depends(get_repositories)) -> ImageTypeService:
    return ImageTypeService(repositories)


def get_style_service(repositories: RepositoryFactory = Depends(get_repositories)) -> StyleService:
    return StyleService(repositories)


def get_project_service(repositories: RepositoryFactory = Depends(get_repositories)) -> ProjectService:
    return ProjectService(repositories)


def get_input_image_service(repositories: RepositoryFactory = Depends(get_repositories)) -> InputImageService:
    return InputImageService(repositories)


def get_render_config_service(repositories: RepositoryFactory = Depends(get_repositories)) -> RenderConfigService:
    return RenderConfigService(repositories)


def get_generation_service(repositories: RepositoryFactory = Depends(get_repositories)) -> GenerationService:
    return GenerationService(repositories)


def get_project_template_service(repositories: RepositoryFactory = Depends(get_repositories)) -> ProjectTemplateService:
    return ProjectTemplateService(repositories)


def get_user_service(repositories: RepositoryFactory = Depends(get_repositories)) -> UserService:
    return UserService(repositories)
