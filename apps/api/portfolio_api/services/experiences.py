"""Experience service layer."""

from portfolio_api.repositories.memory import InMemoryStore
from portfolio_api.schemas.common import Page, update_values
from portfolio_api.schemas.experience import Experience, ExperienceForm, ExperienceUpdate
from portfolio_api.services.store_errors import store_errors

_TABLE = "experiences"
_NOT_FOUND = "Experience not found"


class ExperienceService:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def list_experiences(self, *, page: int, per_page: int) -> Page[Experience]:
        with store_errors():
            result = self._store.select(
                _TABLE,
                order_by=[("start_date", True)],
                offset=(page - 1) * per_page,
                limit=per_page,
            )
        items = [Experience.model_validate(row) for row in result.rows]
        return Page[Experience].build(items, count=result.count, page=page, per_page=per_page)

    def get_experience(self, experience_id: str) -> Experience:
        with store_errors(not_found=_NOT_FOUND):
            row = self._store.get_one(_TABLE, column="id", value=experience_id)
        return Experience.model_validate(row)

    def create_experience(self, form: ExperienceForm) -> Experience:
        with store_errors():
            row = self._store.insert(_TABLE, form.model_dump())
        return Experience.model_validate(row)

    def update_experience(self, experience_id: str, changes: ExperienceUpdate) -> Experience:
        with store_errors(not_found=_NOT_FOUND):
            row = self._store.update(
                _TABLE,
                column="id",
                value=experience_id,
                changes=update_values(changes, nullable=("end_date", "location")),
            )
        return Experience.model_validate(row)

    def delete_experience(self, experience_id: str) -> None:
        with store_errors():
            self._store.delete(_TABLE, column="id", value=experience_id)
