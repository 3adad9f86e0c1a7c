from typing import Sequence, cast
from fastapi import HTTPException, status

from unitofwork import UnitOfWork
from unitofwork.core.exceptions import InvalidPageError
from unitofwork.core.logger import logger
from host.entities import BlogDTO, BlogPageDTO, PageDTO, PostDTO
from host.models import Blog
from host.repositories import CustomBlogRepository
from host.schemas import BlogCreate


def to_blog_dto(b: Blog) -> BlogDTO:
    return BlogDTO(
        id=b.id,
        url=b.url,
        title=b.title,
        created_at=b.created_at,
        posts=[PostDTO(id=p.id, title=p.title, content=p.content) for p in b.posts],
    )


def to_blog_dtos(rows: Sequence[Blog]) -> list[BlogDTO]:
    return [to_blog_dto(b) for b in rows]


class BlogService:
    def __init__(self, page_size: int = 20, max_page_size: int = 100) -> None:
        self.PAGE_SIZE = page_size
        self.MAX_PAGE_SIZE = max_page_size

    def _blogs(self, uow: UnitOfWork) -> CustomBlogRepository:
        return cast(CustomBlogRepository, uow.get_repository(Blog))

    async def _require(self, blog_id: int, uow: UnitOfWork) -> Blog:
        """
        Ensure a blog exists or raise an HTTP 404 error.

        Raises:
            HTTPException: If the blog does not exist.
        """
        b = await self._blogs(uow).get_by_id(blog_id)
        if not b:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Blog not found.")
        return b

    async def create(self, payload: BlogCreate, uow: UnitOfWork) -> BlogDTO:
        """
        Create a blog and its initial posts in one unit of work.

        Raises:
            HTTPException: 500 if creation fails.
        """
        logger.info("[BlogService] Creating blog: %s", payload.model_dump())
        try:
            b = await self._blogs(uow).create_blog(payload)
            dto = to_blog_dto(b)
            await uow.save_changes()
        except Exception as e:
            await uow.rollback()
            logger.error("[BlogService] Create failed: %s", e, exc_info=True)
            raise HTTPException(status_code=500, detail="Failed to create blog")
        logger.info("[BlogService] Blog created ID=%s", dto.id)
        return dto

    async def get(self, blog_id: int, uow: UnitOfWork) -> BlogDTO:
        logger.debug(f"[BlogService] Get blog ID={blog_id}")
        return to_blog_dto(await self._require(blog_id, uow))

    def _page_size(self, page_size: int | None) -> int:
        return min(page_size or self.PAGE_SIZE, self.MAX_PAGE_SIZE)

    async def list_paginated(
        self,
        page_index: int,
        uow: UnitOfWork,
        page_size: int | None = None,
    ) -> BlogPageDTO:
        """
        List blogs page by page, newest first.

        Args:
            page_index: Page number to retrieve (1-based).
            uow: Unit of work of the request.
            page_size: Items per page, capped at MAX_PAGE_SIZE.

        Returns:
            BlogPageDTO with the converted items and the paging metadata.

        Raises:
            HTTPException: 422 for page arguments out of range.
        """
        try:
            page = await self._blogs(uow).get_paged_list(
                page_index=page_index, page_size=self._page_size(page_size)
            )
        except InvalidPageError as e:
            raise HTTPException(status_code=422, detail=str(e))
        return PageDTO.from_paged(page.convert(to_blog_dtos))

    async def search(
        self,
        title: str,
        page_index: int,
        uow: UnitOfWork,
        page_size: int | None = None,
    ) -> BlogPageDTO:
        logger.debug("[BlogService] search title=%r page=%s", title, page_index)
        try:
            page = await self._blogs(uow).search_by_title(title, page_index, self._page_size(page_size))
        except InvalidPageError as e:
            raise HTTPException(status_code=422, detail=str(e))
        return PageDTO.from_paged(page.convert(to_blog_dtos))

    async def delete(self, blog_id: int, uow: UnitOfWork) -> None:
        b = await self._require(blog_id, uow)
        await self._blogs(uow).delete(b)
        await uow.save_changes()
        logger.info("[BlogService] Blog deleted ID=%s", blog_id)
