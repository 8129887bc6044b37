"""Skill routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from portfolio_api.routes.dependencies import get_skill_service, require_admin
from portfolio_api.schemas.common import DataMessageResponse, DataResponse, MessageResponse
from portfolio_api.schemas.error import ADMIN_ERROR_RESPONSES, ErrorResponse
from portfolio_api.schemas.skill import Skill, SkillForm, SkillUpdate
from portfolio_api.services.skills import SkillService

router = APIRouter(prefix="/skills", tags=["Skills"])


@router.get("", response_model=DataResponse[dict[str, list[Skill]]])
async def list_skills(
    service: Annotated[SkillService, Depends(get_skill_service)],
    category: str | None = None,
) -> DataResponse[dict[str, list[Skill]]]:
    return DataResponse[dict[str, list[Skill]]](data=service.list_grouped(category=category))


@router.post(
    "",
    response_model=DataMessageResponse[Skill],
    responses=ADMIN_ERROR_RESPONSES,
    dependencies=[Depends(require_admin)],
)
async def create_skill(
    payload: SkillForm,
    service: Annotated[SkillService, Depends(get_skill_service)],
) -> DataMessageResponse[Skill]:
    skill = service.create_skill(payload)
    return DataMessageResponse[Skill](data=skill, message="Skill created successfully")


@router.get(
    "/{skillId}",
    response_model=DataResponse[Skill],
    responses={404: {"model": ErrorResponse}},
)
async def get_skill(
    skill_id: Annotated[str, Path(alias="skillId")],
    service: Annotated[SkillService, Depends(get_skill_service)],
) -> DataResponse[Skill]:
    return DataResponse[Skill](data=service.get_skill(skill_id))


@router.put(
    "/{skillId}",
    response_model=DataMessageResponse[Skill],
    responses={**ADMIN_ERROR_RESPONSES, 404: {"model": ErrorResponse}},
    dependencies=[Depends(require_admin)],
)
async def update_skill(
    skill_id: Annotated[str, Path(alias="skillId")],
    payload: SkillUpdate,
    service: Annotated[SkillService, Depends(get_skill_service)],
) -> DataMessageResponse[Skill]:
    skill = service.update_skill(skill_id, payload)
    return DataMessageResponse[Skill](data=skill, message="Skill updated successfully")


@router.delete(
    "/{skillId}",
    response_model=MessageResponse,
    responses=ADMIN_ERROR_RESPONSES,
    dependencies=[Depends(require_admin)],
)
async def delete_skill(
    skill_id: Annotated[str, Path(alias="skillId")],
    service: Annotated[SkillService, Depends(get_skill_service)],
) -> MessageResponse:
    service.delete_skill(skill_id)
    return MessageResponse(message="Skill deleted successfully")
