"""Admin surface: sign-in, sign-out and the gated admin pages."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import JSONResponse, RedirectResponse

from portfolio_api.core.config import Settings, get_settings
from portfolio_api.domain.session_gate import SessionGate
from portfolio_api.errors import ApiError
from portfolio_api.routes.dependencies import (
    get_dashboard_service,
    get_message_service,
    get_session_gate,
    require_admin_page,
)
from portfolio_api.schemas.auth import LoginRequest, SessionView, SignedInUser
from portfolio_api.schemas.common import DataMessageResponse, DataResponse
from portfolio_api.schemas.dashboard import DashboardStats
from portfolio_api.schemas.error import ErrorResponse
from portfolio_api.schemas.message import Inbox, ReadStatus
from portfolio_api.services.dashboard import DashboardService
from portfolio_api.services.messages import MessageService

router = APIRouter(prefix="/admin", tags=["Admin"])

_READ_FILTERS: dict[ReadStatus, bool | None] = {
    ReadStatus.ALL: None,
    ReadStatus.READ: True,
    ReadStatus.UNREAD: False,
}


@router.post(
    "/login",
    response_model=DataMessageResponse[SignedInUser],
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def login(
    payload: LoginRequest,
    response: Response,
    gate: Annotated[SessionGate, Depends(get_session_gate)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> DataMessageResponse[SignedInUser] | JSONResponse:
    try:
        session = await gate.sign_in(payload.email, payload.password)
    except ApiError as exc:
        rejected = JSONResponse(status_code=exc.status_code, content=exc.payload.model_dump())
        rejected.delete_cookie(settings.session_cookie_name)
        return rejected

    response.set_cookie(
        settings.session_cookie_name,
        session.token,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )
    return DataMessageResponse[SignedInUser](
        data=SignedInUser(email=session.identity.email),
        message="Signed in successfully",
    )


@router.post("/logout", status_code=303, response_class=RedirectResponse)
async def logout(
    gate: Annotated[SessionGate, Depends(get_session_gate)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> RedirectResponse:
    await gate.sign_out()
    redirect = RedirectResponse(settings.login_path, status_code=303)
    redirect.delete_cookie(settings.session_cookie_name)
    return redirect


@router.get("/login", response_model=DataResponse[SessionView])
async def login_page(
    gate: Annotated[SessionGate, Depends(get_session_gate)],
    next_path: Annotated[str | None, Query(alias="next")] = None,
) -> DataResponse[SessionView]:
    session = gate.session
    return DataResponse[SessionView](
        data=SessionView(
            state=gate.state,
            email=session.identity.email if session else None,
            next=next_path,
        )
    )


@router.get("/session", response_model=DataResponse[SessionView])
async def current_session(
    gate: Annotated[SessionGate, Depends(get_session_gate)],
) -> DataResponse[SessionView]:
    session = gate.session
    return DataResponse[SessionView](
        data=SessionView(state=gate.state, email=session.identity.email if session else None)
    )


@router.get(
    "/dashboard",
    response_model=DataResponse[DashboardStats],
    dependencies=[Depends(require_admin_page)],
)
async def dashboard(
    service: Annotated[DashboardService, Depends(get_dashboard_service)],
) -> DataResponse[DashboardStats]:
    return DataResponse[DashboardStats](data=await service.collect_stats())


@router.get(
    "/messages",
    response_model=DataResponse[Inbox],
    dependencies=[Depends(require_admin_page)],
)
async def inbox(
    service: Annotated[MessageService, Depends(get_message_service)],
    status: ReadStatus = ReadStatus.ALL,
    search: str | None = None,
    page: Annotated[int, Query(ge=1)] = 1,
    per_page: Annotated[int, Query(ge=1, le=100)] = 50,
) -> DataResponse[Inbox]:
    listing = service.list_messages(
        page=page,
        per_page=per_page,
        is_read=_READ_FILTERS[status],
        search=search,
    )
    return DataResponse[Inbox](
        data=Inbox(messages=listing.data, count=listing.count, unread_count=service.unread_count())
    )
