"""Skill service layer."""

from portfolio_api.repositories.memory import InMemoryStore
from portfolio_api.schemas.common import update_values
from portfolio_api.schemas.skill import Skill, SkillForm, SkillUpdate
from portfolio_api.services.store_errors import store_errors

_TABLE = "skills"
_NOT_FOUND = "Skill not found"


class SkillService:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def list_grouped(self, *, category: str | None = None) -> dict[str, list[Skill]]:
        """Return skills keyed by category, strongest first and then by name."""
        with store_errors():
            result = self._store.select(
                _TABLE,
                filters={"category": category} if category else None,
                order_by=[("proficiency", True), ("name", False)],
            )

        grouped: dict[str, list[Skill]] = {}
        for row in result.rows:
            skill = Skill.model_validate(row)
            grouped.setdefault(skill.category, []).append(skill)
        return grouped

    def get_skill(self, skill_id: str) -> Skill:
        with store_errors(not_found=_NOT_FOUND):
            row = self._store.get_one(_TABLE, column="id", value=skill_id)
        return Skill.model_validate(row)

    def create_skill(self, form: SkillForm) -> Skill:
        with store_errors():
            row = self._store.insert(_TABLE, form.model_dump())
        return Skill.model_validate(row)

    def update_skill(self, skill_id: str, changes: SkillUpdate) -> Skill:
        with store_errors(not_found=_NOT_FOUND):
            row = self._store.update(
                _TABLE,
                column="id",
                value=skill_id,
                changes=update_values(changes),
            )
        return Skill.model_validate(row)

    def delete_skill(self, skill_id: str) -> None:
        with store_errors():
            self._store.delete(_TABLE, column="id", value=skill_id)
