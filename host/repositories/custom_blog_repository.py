from typing import Optional
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession

from unitofwork.paging import PagedList
from unitofwork.repositories import Repository
from host.models import Blog, Post
from host.schemas import BlogCreate


class CustomBlogRepository(Repository[Blog]):
    """Repository for Blog model, registered in place of the generic one."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Blog)

    async def create_blog(self, payload: BlogCreate) -> Blog:
        blog = Blog(
            url=payload.url,
            title=payload.title,
            posts=[Post(title=p.title, content=p.content) for p in payload.posts],
        )
        await self.add(blog)
        return blog

    async def get_by_title(self, title: str) -> Optional[Blog]:
        return await self.get_first_or_default(
            func.trim(func.lower(Blog.title)) == func.trim(func.lower(title))
        )

    async def search_by_title(
        self,
        fragment: str,
        page_index: int,
        page_size: int,
    ) -> PagedList[Blog]:
        return await self.get_paged_list(
            Blog.title.icontains(fragment.strip(), autoescape=True),
            order_by=Blog.id.asc(),
            page_index=page_index,
            page_size=page_size,
        )
