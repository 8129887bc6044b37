"""Project service layer."""

from datetime import UTC, datetime

from portfolio_api.repositories.memory import InMemoryStore
from portfolio_api.schemas.common import Page, update_values
from portfolio_api.schemas.project import Project, ProjectForm, ProjectUpdate
from portfolio_api.services.store_errors import store_errors

_TABLE = "projects"
_NOT_FOUND = "Project not found"


class ProjectService:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def list_projects(self, *, page: int, per_page: int, featured_only: bool = False) -> Page[Project]:
        with store_errors():
            result = self._store.select(
                _TABLE,
                filters={"featured": True} if featured_only else None,
                order_by=[("created_at", True)],
                offset=(page - 1) * per_page,
                limit=per_page,
            )
        items = [Project.model_validate(row) for row in result.rows]
        return Page[Project].build(items, count=result.count, page=page, per_page=per_page)

    def get_project(self, project_id: str) -> Project:
        with store_errors(not_found=_NOT_FOUND):
            row = self._store.get_one(_TABLE, column="id", value=project_id)
        return Project.model_validate(row)

    def create_project(self, form: ProjectForm) -> Project:
        values = form.model_dump()
        values["updated_at"] = datetime.now(UTC)
        with store_errors():
            row = self._store.insert(_TABLE, values)
        return Project.model_validate(row)

    def update_project(self, project_id: str, changes: ProjectUpdate) -> Project:
        values = update_values(changes, nullable=("image_url", "demo_url", "github_url"))
        values["updated_at"] = datetime.now(UTC)
        with store_errors(not_found=_NOT_FOUND):
            row = self._store.update(_TABLE, column="id", value=project_id, changes=values)
        return Project.model_validate(row)

    def delete_project(self, project_id: str) -> None:
        with store_errors():
            self._store.delete(_TABLE, column="id", value=project_id)
