"""Experience routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from portfolio_api.routes.dependencies import get_experience_service, require_admin
from portfolio_api.schemas.common import DataMessageResponse, DataResponse, MessageResponse, Page
from portfolio_api.schemas.error import ADMIN_ERROR_RESPONSES, ErrorResponse
from portfolio_api.schemas.experience import Experience, ExperienceForm, ExperienceUpdate
from portfolio_api.services.experiences import ExperienceService

router = APIRouter(prefix="/experiences", tags=["Experiences"])


@router.get("", response_model=Page[Experience])
async def list_experiences(
    service: Annotated[ExperienceService, Depends(get_experience_service)],
    page: Annotated[int, Query(ge=1)] = 1,
    per_page: Annotated[int, Query(ge=1, le=100)] = 10,
) -> Page[Experience]:
    return service.list_experiences(page=page, per_page=per_page)


@router.post(
    "",
    response_model=DataMessageResponse[Experience],
    responses=ADMIN_ERROR_RESPONSES,
    dependencies=[Depends(require_admin)],
)
async def create_experience(
    payload: ExperienceForm,
    service: Annotated[ExperienceService, Depends(get_experience_service)],
) -> DataMessageResponse[Experience]:
    experience = service.create_experience(payload)
    return DataMessageResponse[Experience](data=experience, message="Experience created successfully")


@router.get(
    "/{experienceId}",
    response_model=DataResponse[Experience],
    responses={404: {"model": ErrorResponse}},
)
async def get_experience(
    experience_id: Annotated[str, Path(alias="experienceId")],
    service: Annotated[ExperienceService, Depends(get_experience_service)],
) -> DataResponse[Experience]:
    return DataResponse[Experience](data=service.get_experience(experience_id))


@router.put(
    "/{experienceId}",
    response_model=DataMessageResponse[Experience],
    responses={**ADMIN_ERROR_RESPONSES, 404: {"model": ErrorResponse}},
    dependencies=[Depends(require_admin)],
)
async def update_experience(
    experience_id: Annotated[str, Path(alias="experienceId")],
    payload: ExperienceUpdate,
    service: Annotated[ExperienceService, Depends(get_experience_service)],
) -> DataMessageResponse[Experience]:
    experience = service.update_experience(experience_id, payload)
    return DataMessageResponse[Experience](data=experience, message="Experience updated successfully")


@router.delete(
    "/{experienceId}",
    response_model=MessageResponse,
    responses=ADMIN_ERROR_RESPONSES,
    dependencies=[Depends(require_admin)],
)
async def delete_experience(
    experience_id: Annotated[str, Path(alias="experienceId")],
    service: Annotated[ExperienceService, Depends(get_experience_service)],
) -> MessageResponse:
    service.delete_experience(experience_id)
    return MessageResponse(message="Experience deleted successfully")
