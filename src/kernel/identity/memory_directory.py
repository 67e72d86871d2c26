"""In-memory implementation of UserDirectory for tests and local runs."""

from typing import Optional

from src.kernel.identity.exceptions import DuplicateEmail
from src.kernel.models.user import User


class InMemoryUserDirectory:
    def __init__(self):
        self.store: dict[str, User] = {}
        self.save_count = 0

    # ── read operations ──────────────────────────────────────

    async def exists_by_email(self, email: str) -> bool:
        return email in self.store

    async def find_by_email(self, email: str) -> Optional[User]:
        return self.store.get(email)

    # ── write operations ─────────────────────────────────────

    async def save(self, user: User) -> User:
        existing = self.store.get(user.email)
        if existing is not None and existing.id != user.id:
            raise DuplicateEmail()

        # Phone ids mimic the database identity column
        next_id = 1 + max(
            (p.id for u in self.store.values() for p in u.phones if p.id is not None),
            default=0,
        )
        for phone in user.phones:
            if phone.id is None:
                phone.id = next_id
                phone.user_id = user.id
                next_id += 1

        self.store[user.email] = user
        self.save_count += 1
        return user
