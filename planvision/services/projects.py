"""
User-owned projects.
"""
from planvision.services.crud import OwnedCrudService


class ProjectService(OwnedCrudService):
    table = "projects"
    entity = "Project"
