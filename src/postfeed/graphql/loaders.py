from sqlalchemy import select
from strawberry.dataloader import DataLoader

from ..database.connection import get_async_session
from ..dbmodels import Users


async def load_users(keys: list[int]) -> list[Users | None]:
    """Batch load users by ID."""
    async with get_async_session() as session:
        stmt = select(Users).where(Users.id.in_(keys))
        result = await session.execute(stmt)
        users = result.scalars().all()
        users_map = {user.id: user for user in users}
        return [users_map.get(key) for key in keys]


class Loaders:
    def __init__(self):
        self.user_loader = DataLoader(load_fn=load_users)
