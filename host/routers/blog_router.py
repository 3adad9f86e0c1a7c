from fastapi import APIRouter, HTTPException, Depends, Query, status
from dependency_injector.wiring import inject, Provide

from unitofwork import UnitOfWork
from unitofwork.core.logger import logger
from host.app_containers import ApplicationContainer
from host.deps import get_unit_of_work
from host.entities import BlogDTO, BlogPageDTO
from host.schemas import BlogCreate
from host.services import BlogService

router = APIRouter(prefix="/blogs", tags=["Blogs"])

@router.post(
    "/create",
    response_model=BlogDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new blog",
)
@inject
async def create_blog(
    request: BlogCreate,
    uow: UnitOfWork = Depends(get_unit_of_work),
    service: BlogService = Depends(Provide[ApplicationContainer.blog_service]),
) -> BlogDTO:
    logger.info("[BlogRouter] create payload=%s", request.model_dump())
    return await service.create(payload=request, uow=uow)

@router.get(
    "/by-id/{blog_id}",
    response_model=BlogDTO,
    summary="Get blog by ID",
)
@inject
async def get_blog(
    blog_id: int,
    uow: UnitOfWork = Depends(get_unit_of_work),
    service: BlogService = Depends(Provide[ApplicationContainer.blog_service]),
):
    logger.debug(f"[BlogRouter] get id={blog_id}")
    try:
        return await service.get(blog_id, uow)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[BlogRouter] get error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch blog")

@router.get(
    "",
    response_model=BlogPageDTO,
    summary="List blogs paginated",
)
@inject
async def list_blogs_paginated(
    page_index: int = Query(1, ge=1),
    page_size: int | None = Query(None, ge=1),
    uow: UnitOfWork = Depends(get_unit_of_work),
    service: BlogService = Depends(Provide[ApplicationContainer.blog_service]),
):
    logger.debug(f"[BlogRouter] list_paginated page={page_index} size={page_size}")
    try:
        return await service.list_paginated(page_index, uow, page_size=page_size)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[BlogRouter] list_paginated error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to list blogs")

@router.get(
    "/search",
    response_model=BlogPageDTO,
    summary="Search blogs by title",
)
@inject
async def search_blogs(
    title: str = Query(..., min_length=1),
    page_index: int = Query(1, ge=1),
    page_size: int | None = Query(None, ge=1),
    uow: UnitOfWork = Depends(get_unit_of_work),
    service: BlogService = Depends(Provide[ApplicationContainer.blog_service]),
):
    try:
        return await service.search(title, page_index, uow, page_size=page_size)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[BlogRouter] search error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to search blogs")

@router.delete(
    "/by-id/{blog_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete blog",
)
@inject
async def delete_blog(
    blog_id: int,
    uow: UnitOfWork = Depends(get_unit_of_work),
    service: BlogService = Depends(Provide[ApplicationContainer.blog_service]),
) -> None:
    logger.info("[BlogRouter] delete id=%s", blog_id)
    await service.delete(blog_id, uow)
