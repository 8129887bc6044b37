"""Contact message service layer."""

from __future__ import annotations

import logging

from portfolio_api.core.logging_safety import safe_log_identifier
from portfolio_api.repositories.memory import InMemoryStore, Row, RowPredicate
from portfolio_api.schemas.common import Page
from portfolio_api.schemas.message import ContactForm, Message
from portfolio_api.services.store_errors import store_errors

logger = logging.getLogger(__name__)

_TABLE = "messages"
_NOT_FOUND = "Message not found"
_SEARCHABLE_FIELDS = ("name", "email", "subject", "message")


def _search_predicate(term: str | None) -> RowPredicate | None:
    needle = (term or "").strip().casefold()
    if not needle:
        return None

    def matches(row: Row) -> bool:
        return any(needle in str(row.get(name) or "").casefold() for name in _SEARCHABLE_FIELDS)

    return matches


class MessageService:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def list_messages(
        self,
        *,
        page: int,
        per_page: int,
        is_read: bool | None = None,
        search: str | None = None,
    ) -> Page[Message]:
        with store_errors():
            result = self._store.select(
                _TABLE,
                filters=None if is_read is None else {"is_read": is_read},
                predicate=_search_predicate(search),
                order_by=[("created_at", True)],
                offset=(page - 1) * per_page,
                limit=per_page,
            )
        items = [Message.model_validate(row) for row in result.rows]
        return Page[Message].build(items, count=result.count, page=page, per_page=per_page)

    def unread_count(self) -> int:
        with store_errors():
            return self._store.count(_TABLE, filters={"is_read": False})

    def get_message(self, message_id: str) -> Message:
        with store_errors(not_found=_NOT_FOUND):
            row = self._store.get_one(_TABLE, column="id", value=message_id)
        return Message.model_validate(row)

    def submit(self, form: ContactForm) -> Message:
        values = form.model_dump()
        values["is_read"] = False
        with store_errors():
            row = self._store.insert(_TABLE, values)

        logger.info("message.received sender=%s", safe_log_identifier(form.email, prefix="email"))
        return Message.model_validate(row)

    def mark_read(self, message_id: str, is_read: bool) -> Message:
        with store_errors(not_found=_NOT_FOUND):
            row = self._store.update(_TABLE, column="id", value=message_id, changes={"is_read": is_read})
        return Message.model_validate(row)

    def delete_message(self, message_id: str) -> None:
        with store_errors():
            self._store.delete(_TABLE, column="id", value=message_id)
