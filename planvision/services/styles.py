"""
Design styles and their image-type links.

A style row stores the ids of the image types it applies to in
``image_type_ids``; responses embed the linked image type records as
``image_types``. Per-type thumbnails live in ``style_thumbnails``.
"""
import logging
from fastapi import HTTPException, status
from typing import Optional, List, Dict, Any

from planvision.services.crud import CrudService

logger = logging.getLogger(__name__)


class StyleService(CrudService):
    table = "styles"
    entity = "Style"
    order_by = "name"

    def __init__(self, repositories):
        super().__init__(repositories)
        self.image_types = repositories.get("image_types")
        self.thumbnails = repositories.get("style_thumbnails")

    def _check_image_types(self, image_type_ids: List[str]) -> None:
        for image_type_id in image_type_ids:
            if not self.image_types.find_unique(image_type_id):
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND,
                    detail=f"ImageType {image_type_id} not found",
                )

    def _with_image_types(self, style: Dict[str, Any]) -> Dict[str, Any]:
        ids = style.get("image_type_ids") or []
        linked = [self.image_types.find_unique(i) for i in ids]
        return {**style, "image_type_ids": ids, "image_types": [t for t in linked if t]}

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        data = {**data, "image_type_ids": data.get("image_type_ids") or []}
        self._check_image_types(data["image_type_ids"])
        return self._with_image_types(super().create(data))

    def find_all(self, image_type_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        List styles alphabetically.

        With ``image_type_id``, only styles linked to that type are returned,
        each using its contextual thumbnail for the type when one exists.
        """
        styles = super().find_all()
        if not image_type_id:
            return [self._with_image_types(s) for s in styles]

        result = []
        for style in styles:
            if image_type_id not in (style.get("image_type_ids") or []):
                continue
            thumbnail = self.thumbnails.find_first({"style_id": style["id"], "image_type_id": image_type_id})
            if thumbnail and thumbnail.get("thumbnail_url"):
                style = {**style, "thumbnail_url": thumbnail["thumbnail_url"]}
            result.append(self._with_image_types(style))
        logger.info(f"✅ {len(result)} styles apply to image type {image_type_id}")
        return result

    def find_one(self, record_id: str) -> Dict[str, Any]:
        return self._with_image_types(super().find_one(record_id))

    def update(self, record_id: str, patch: Dict[str, Any]) -> Dict[str, Any]:
        if patch.get("image_type_ids") is not None:
            self._check_image_types(patch["image_type_ids"])
        elif "image_type_ids" in patch:
            patch = {**patch, "image_type_ids": []}
        return self._with_image_types(super().update(record_id, patch))
