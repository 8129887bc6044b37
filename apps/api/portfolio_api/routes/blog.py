"""Blog post routes.

Single-item operations address posts by slug rather than by id.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from portfolio_api.routes.dependencies import get_blog_service, require_admin
from portfolio_api.schemas.blog import BlogPost, BlogPostForm, BlogPostUpdate
from portfolio_api.schemas.common import DataMessageResponse, DataResponse, MessageResponse, Page
from portfolio_api.schemas.error import ADMIN_ERROR_RESPONSES, ErrorResponse
from portfolio_api.services.blog import BlogService

router = APIRouter(prefix="/blog", tags=["Blog"])


@router.get("", response_model=Page[BlogPost])
async def list_posts(
    service: Annotated[BlogService, Depends(get_blog_service)],
    page: Annotated[int, Query(ge=1)] = 1,
    per_page: Annotated[int, Query(ge=1, le=100)] = 10,
    published: bool | None = None,
) -> Page[BlogPost]:
    return service.list_posts(page=page, per_page=per_page, published=published)


@router.post(
    "",
    response_model=DataMessageResponse[BlogPost],
    responses=ADMIN_ERROR_RESPONSES,
    dependencies=[Depends(require_admin)],
)
async def create_post(
    payload: BlogPostForm,
    service: Annotated[BlogService, Depends(get_blog_service)],
) -> DataMessageResponse[BlogPost]:
    post = service.create_post(payload)
    return DataMessageResponse[BlogPost](data=post, message="Blog post created successfully")


@router.get(
    "/{slug}",
    response_model=DataResponse[BlogPost],
    responses={404: {"model": ErrorResponse}},
)
async def get_post(
    slug: Annotated[str, Path()],
    service: Annotated[BlogService, Depends(get_blog_service)],
) -> DataResponse[BlogPost]:
    return DataResponse[BlogPost](data=service.get_post(slug))


@router.put(
    "/{slug}",
    response_model=DataMessageResponse[BlogPost],
    responses={**ADMIN_ERROR_RESPONSES, 404: {"model": ErrorResponse}},
    dependencies=[Depends(require_admin)],
)
async def update_post(
    slug: Annotated[str, Path()],
    payload: BlogPostUpdate,
    service: Annotated[BlogService, Depends(get_blog_service)],
) -> DataMessageResponse[BlogPost]:
    post = service.update_post(slug, payload)
    return DataMessageResponse[BlogPost](data=post, message="Blog post updated successfully")


@router.delete(
    "/{slug}",
    response_model=MessageResponse,
    responses=ADMIN_ERROR_RESPONSES,
    dependencies=[Depends(require_admin)],
)
async def delete_post(
    slug: Annotated[str, Path()],
    service: Annotated[BlogService, Depends(get_blog_service)],
) -> MessageResponse:
    service.delete_post(slug)
    return MessageResponse(message="Blog post deleted successfully")
