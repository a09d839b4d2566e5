import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shorturl_app.models.user import User
from shorturl_app.security.passwords import (
    DUMMY_PASSWORD_HASH,
    hash_password,
    verify_password,
)
from shorturl_app.services.exceptions import UsernameAlreadyExistsError

logger = logging.getLogger(__name__)


class UserService:
    """Registration, credential checks and user lookups."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: Optional[int]) -> Optional[User]:
        if user_id is None:
            return None
        return self.db.get(User, user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def register(self, username: str, password: str) -> User:
        """
        Create a user with a bcrypt-hashed password.

        The SELECT gives the common case a clean error; the unique index on
        username catches the concurrent case at commit time.

        Raises:
            UsernameAlreadyExistsError: username is taken
        """
        if self.get_by_username(username):
            raise UsernameAlreadyExistsError(username)

        user = User(username=username, password_hash=hash_password(password))
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise UsernameAlreadyExistsError(username)
        self.db.refresh(user)

        logger.info("Registered user %s (id=%s)", user.username, user.id)
        return user

    def authenticate(self, username: str, password: str) -> Optional[User]:
        """
        Return the user if the credentials match, else None.

        An unknown username and a wrong password are indistinguishable to
        the caller, including in how long the check takes.
        """
        user = self.get_by_username(username)
        if user is None:
            verify_password(password, DUMMY_PASSWORD_HASH)
            return None

        if not verify_password(password, user.password_hash):
            return None

        return user
