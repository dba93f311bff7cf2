"""
Render configurations: the parameters of one generation request.

A render config belongs to a project, and the project must belong to the
caller. Its input image, image type and (optional) style must exist.
"""
import logging
from fastapi import HTTPException, status
from typing import List, Dict, Any

from planvision.models.schemas import UserSession
from planvision.services.crud import CrudService
from planvision.services.repository import RecordNotFoundError

logger = logging.getLogger(__name__)


def _not_found(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class RenderConfigService(CrudService):
    table = "render_configs"
    entity = "Render config"
    order_by = "created_at"
    descending = True

    def __init__(self, repositories):
        super().__init__(repositories)
        self.projects = repositories.get("projects")
        self.input_images = repositories.get("input_images")
        self.image_types = repositories.get("image_types")
        self.styles = repositories.get("styles")

    def assert_project_ownership(self, project_id: str, session: UserSession) -> Dict[str, Any]:
        project = self.projects.find_first({"id": project_id, "user_id": session.user.id})
        if not project:
            raise _not_found(f"Project {project_id} not found for user")
        return project

    def _check_references(self, data: Dict[str, Any], session: UserSession) -> None:
        if data.get("project_id"):
            self.assert_project_ownership(data["project_id"], session)
        if data.get("input_image_id"):
            image = self.input_images.find_first({"id": data["input_image_id"], "user_id": session.user.id})
            if not image:
                raise _not_found(f"Input image {data['input_image_id']} not found")
        if data.get("image_type_id") and not self.image_types.find_unique(data["image_type_id"]):
            raise _not_found("ImageType not found")
        if data.get("style_id") and not self.styles.find_unique(data["style_id"]):
            raise _not_found(f"Style {data['style_id']} not found")

    def create_for_session(self, data: Dict[str, Any], session: UserSession) -> Dict[str, Any]:
        self._check_references(data, session)
        return self.create(data)

    def find_all_by_project(self, project_id: str, session: UserSession) -> List[Dict[str, Any]]:
        self.assert_project_ownership(project_id, session)
        return self.repo.find_many(
            where={"project_id": project_id},
            order_by=self.order_by,
            descending=self.descending,
        )

    def find_one_for_session(self, record_id: str, session: UserSession) -> Dict[str, Any]:
        record = self.find_one(record_id)
        self.assert_project_ownership(record["project_id"], session)
        return record

    def update_for_session(self, record_id: str, patch: Dict[str, Any], session: UserSession) -> Dict[str, Any]:
        existing = self.find_one_for_session(record_id, session)
        if not patch:
            return existing
        self._check_references(patch, session)
        try:
            return self.repo.update(record_id, patch)
        except RecordNotFoundError:
            raise self.not_found(record_id)

    def remove_for_session(self, record_id: str, session: UserSession) -> None:
        self.find_one_for_session(record_id, session)
        try:
            self.repo.delete(record_id)
        except RecordNotFoundError:
            raise self.not_found(record_id)
        logger.info(f"✅ Render config ID={record_id} deleted")
