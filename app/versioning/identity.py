from typing import Mapping, Protocol

from sqlalchemy.orm import Session

from app.models.user import User

UNKNOWN_USER = "Unknown user"


class EmailLookup(Protocol):
    def email_for(self, user_id: int | None) -> str | None: ...


class UserTableEmailLookup:
    """Resolves acting-user ids against the users table, memoizing per instance."""

    def __init__(self, db: Session):
        self.db = db
        self._cache: dict[int, str | None] = {}

    def email_for(self, user_id: int | None) -> str | None:
        if user_id is None:
            return None
        if user_id not in self._cache:
            user = self.db.get(User, user_id)
            self._cache[user_id] = user.email if user else None
        return self._cache[user_id]


class StaticEmailLookup:
    def __init__(self, emails: Mapping[int, str]):
        self.emails = dict(emails)

    def email_for(self, user_id: int | None) -> str | None:
        return self.emails.get(user_id)
