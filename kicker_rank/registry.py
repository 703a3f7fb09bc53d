"""Player registration and rating storage."""

from __future__ import annotations

import uuid
from typing import Optional

from .db import KeyValueStore
from .errors import DuplicateName, InvalidRating, NotFound
from .logging_config import get_logger
from .models import User
from .repository import Collection

log = get_logger(__name__)

USERS = "users"


class UserRegistry:
    def __init__(self, store: KeyValueStore) -> None:
        self.users: Collection[User] = Collection(store, USERS, User.from_dict)

    async def register(self, name: str, rating: int) -> User:
        """Create a player with a fresh id.

        Raises DuplicateName if the exact name is taken (no case folding) and
        InvalidRating if ``rating`` is negative. Nothing is written on failure.
        """
        if rating < 0:
            raise InvalidRating(rating)
        if await self.find_by_name(name) is not None:
            raise DuplicateName(name)
        user = User(id=str(uuid.uuid4()), name=name, rating=rating)
        await self.users.put(user)
        log.info("Registered user %s (rating=%s id=%s)", name, rating, user.id)
        return user

    async def list(self) -> list[User]:
        """All players in store order. Ranking is QueryService's job."""
        return await self.users.list_all()

    async def get(self, user_id: str) -> User:
        user = await self.users.get(user_id)
        if user is None:
            raise NotFound(user_id)
        return user

    async def find_by_name(self, name: str) -> Optional[User]:
        for user in await self.users.list_all():
            if user.name == name:
                return user
        return None

    async def update_rating(self, user_id: str, rating: int) -> None:
        """Overwrite a player's rating, leaving the name alone."""
        user = await self.get(user_id)
        user.rating = rating
        await self.users.put(user)
        log.debug("Updated rating user=%s rating=%s", user_id, rating)
