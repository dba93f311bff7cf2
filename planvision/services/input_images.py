"""
Source images uploaded or registered by a user.
"""
from typing import Dict, Any

from planvision.models.schemas import UserSession
from planvision.services.crud import OwnedCrudService
from planvision.services.storage import StorageService


class InputImageService(OwnedCrudService):
    table = "input_images"
    entity = "Input image"

    def create_from_upload(
        self,
        storage: StorageService,
        filename: str,
        data: bytes,
        content_type: str,
        session: UserSession,
    ) -> Dict[str, Any]:
        object_name = storage.upload_file(filename, data, content_type)
        return self.create_owned({"url": storage.get_public_url(object_name)}, session)

    def get_signed_url(self, storage: StorageService, record_id: str, session: UserSession) -> str:
        record = self.find_one_owned(record_id, session)
        return storage.get_signed_url(storage.extract_object_name(record["url"]))
