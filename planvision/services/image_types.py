"""
Image type catalogue (e.g. "2D Floor Plan", "Room Photo").
"""
from fastapi import HTTPException, status

from planvision.services.crud import CrudService


class ImageTypeService(CrudService):
    table = "image_types"
    entity = "ImageType"

    def not_found(self, record_id: str) -> HTTPException:
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="ImageType not found")
