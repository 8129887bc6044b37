"""Project routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from portfolio_api.routes.dependencies import get_project_service, require_admin
from portfolio_api.schemas.common import DataMessageResponse, DataResponse, MessageResponse, Page
from portfolio_api.schemas.error import ADMIN_ERROR_RESPONSES, ErrorResponse
from portfolio_api.schemas.project import Project, ProjectForm, ProjectUpdate
from portfolio_api.services.projects import ProjectService

router = APIRouter(prefix="/projects", tags=["Projects"])


@router.get("", response_model=Page[Project], responses={400: {"model": ErrorResponse}})
async def list_projects(
    service: Annotated[ProjectService, Depends(get_project_service)],
    page: Annotated[int, Query(ge=1)] = 1,
    per_page: Annotated[int, Query(ge=1, le=100)] = 10,
    featured: bool = False,
) -> Page[Project]:
    return service.list_projects(page=page, per_page=per_page, featured_only=featured)


@router.post(
    "",
    response_model=DataMessageResponse[Project],
    responses=ADMIN_ERROR_RESPONSES,
    dependencies=[Depends(require_admin)],
)
async def create_project(
    payload: ProjectForm,
    service: Annotated[ProjectService, Depends(get_project_service)],
) -> DataMessageResponse[Project]:
    project = service.create_project(payload)
    return DataMessageResponse[Project](data=project, message="Project created successfully")


@router.get(
    "/{projectId}",
    response_model=DataResponse[Project],
    responses={404: {"model": ErrorResponse}},
)
async def get_project(
    project_id: Annotated[str, Path(alias="projectId")],
    service: Annotated[ProjectService, Depends(get_project_service)],
) -> DataResponse[Project]:
    return DataResponse[Project](data=service.get_project(project_id))


@router.put(
    "/{projectId}",
    response_model=DataMessageResponse[Project],
    responses={**ADMIN_ERROR_RESPONSES, 404: {"model": ErrorResponse}},
    dependencies=[Depends(require_admin)],
)
async def update_project(
    project_id: Annotated[str, Path(alias="projectId")],
    payload: ProjectUpdate,
    service: Annotated[ProjectService, Depends(get_project_service)],
) -> DataMessageResponse[Project]:
    project = service.update_project(project_id, payload)
    return DataMessageResponse[Project](data=project, message="Project updated successfully")


@router.delete(
    "/{projectId}",
    response_model=MessageResponse,
    responses=ADMIN_ERROR_RESPONSES,
    dependencies=[Depends(require_admin)],
)
async def delete_project(
    project_id: Annotated[str, Path(alias="projectId")],
    service: Annotated[ProjectService, Depends(get_project_service)],
) -> MessageResponse:
    service.delete_project(project_id)
    return MessageResponse(message="Project deleted successfully")
