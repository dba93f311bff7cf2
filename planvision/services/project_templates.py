"""
Home-screen project templates and their image assets.
"""
import time
from typing import Dict

from planvision.services.crud import CrudService
from planvision.services.storage import StorageService


class ProjectTemplateService(CrudService):
    table = "project_templates"
    entity = "ProjectTemplate"

    def upload_asset(self, storage: StorageService, filename: str, data: bytes, content_type: str) -> Dict[str, str]:
        destination = f"templates/{int(time.time() * 1000)}-{filename}"
        object_name = storage.upload_file(filename, data, content_type, destination=destination)
        return {"url": storage.get_public_url(object_name)}
