from collections.abc import AsyncGenerator
from fastapi import Request

from unitofwork import UnitOfWork


async def get_unit_of_work(request: Request) -> AsyncGenerator[UnitOfWork, None]:
    """One unit of work per request; rolled back and closed when the request ends."""
    container = request.app.state.container
    async with container.uow_container.unit_of_work() as uow:
        yield uow
