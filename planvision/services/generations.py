"""
Read access to render-job generations.

Generation rows are written by the external render worker; this service only
reports on them.
"""
from typing import Optional, List, Dict, Any

from planvision.services.repository import RepositoryFactory


class GenerationService:
    table = "generations"

    def __init__(self, repositories: RepositoryFactory):
        self.repo = repositories.get(self.table)

    def get_history(self, config_id: str) -> List[Dict[str, Any]]:
        return self.repo.find_many(
            where={"render_config_id": config_id},
            order_by="created_at",
            descending=True,
        )

    def get_latest(self, config_id: str) -> Optional[Dict[str, Any]]:
        history = self.get_history(config_id)
        return history[0] if history else None
