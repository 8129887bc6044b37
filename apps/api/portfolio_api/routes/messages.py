"""Contact message routes.

Anyone may submit a message; reading and managing the inbox is admin-only.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from portfolio_api.routes.dependencies import get_message_service, require_admin
from portfolio_api.schemas.common import DataMessageResponse, DataResponse, MessageResponse, Page
from portfolio_api.schemas.error import ADMIN_ERROR_RESPONSES, ErrorResponse
from portfolio_api.schemas.message import ContactForm, Message, MessageUpdate
from portfolio_api.services.messages import MessageService

router = APIRouter(prefix="/messages", tags=["Messages"])


@router.get(
    "",
    response_model=Page[Message],
    responses=ADMIN_ERROR_RESPONSES,
    dependencies=[Depends(require_admin)],
)
async def list_messages(
    service: Annotated[MessageService, Depends(get_message_service)],
    page: Annotated[int, Query(ge=1)] = 1,
    per_page: Annotated[int, Query(ge=1, le=100)] = 10,
    unread: bool = False,
    search: str | None = None,
) -> Page[Message]:
    return service.list_messages(
        page=page,
        per_page=per_page,
        is_read=False if unread else None,
        search=search,
    )


@router.post(
    "",
    response_model=DataMessageResponse[Message],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def submit_message(
    payload: ContactForm,
    service: Annotated[MessageService, Depends(get_message_service)],
) -> DataMessageResponse[Message]:
    message = service.submit(payload)
    return DataMessageResponse[Message](data=message, message="Message sent successfully")


@router.get(
    "/{messageId}",
    response_model=DataResponse[Message],
    responses={**ADMIN_ERROR_RESPONSES, 404: {"model": ErrorResponse}},
    dependencies=[Depends(require_admin)],
)
async def get_message(
    message_id: Annotated[str, Path(alias="messageId")],
    service: Annotated[MessageService, Depends(get_message_service)],
) -> DataResponse[Message]:
    return DataResponse[Message](data=service.get_message(message_id))


@router.put(
    "/{messageId}",
    response_model=DataMessageResponse[Message],
    responses={**ADMIN_ERROR_RESPONSES, 404: {"model": ErrorResponse}},
    dependencies=[Depends(require_admin)],
)
async def update_message(
    message_id: Annotated[str, Path(alias="messageId")],
    payload: MessageUpdate,
    service: Annotated[MessageService, Depends(get_message_service)],
) -> DataMessageResponse[Message]:
    message = service.mark_read(message_id, payload.is_read)
    text = "Message marked as read" if payload.is_read else "Message marked as unread"
    return DataMessageResponse[Message](data=message, message=text)


@router.delete(
    "/{messageId}",
    response_model=MessageResponse,
    responses=ADMIN_ERROR_RESPONSES,
    dependencies=[Depends(require_admin)],
)
async def delete_message(
    message_id: Annotated[str, Path(alias="messageId")],
    service: Annotated[MessageService, Depends(get_message_service)],
) -> MessageResponse:
    service.delete_message(message_id)
    return MessageResponse(message="Message deleted successfully")
