import logging
from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from shorturl_app.models.short_url import ShortURL
from shorturl_app.models.user import User
from shorturl_app.services.short_code_strategies import ShortCodeStrategy

logger = logging.getLogger(__name__)


class ShortURLService:
    """
    Short link persistence: creation, lookup, click counting and deletion.

    Methods are synchronous; FastAPI routes call them from async handlers,
    which is fine for short SQLite/PostgreSQL queries.
    """

    def __init__(
        self,
        db: Session,
        short_code_strategy: ShortCodeStrategy
    ):
        """
        Args:
            db: Database session
            short_code_strategy: Strategy that produces each new link's code
        """
        self.db = db
        self.short_code_strategy = short_code_strategy

    def list_all(self) -> List[ShortURL]:
        """Every link in the store, newest first"""
        return self.db.query(ShortURL).order_by(ShortURL.id.desc()).all()

    def create_short_url(self, target_url: str, owner: User) -> ShortURL:
        """Create a new short URL owned by ``owner``

        Process:
        1. INSERT with a NULL short_code to get the auto-increment ID
        2. Generate the short_code using the strategy
        3. Commit once: the link and its place in owner.short_urls land together
        """
        short_url = ShortURL(target_url=target_url, owner_id=owner.id, clicks=0)
        self.db.add(short_url)
        try:
            self.db.flush()
            short_url.short_code = self.short_code_strategy.generate(short_url.id, self.db)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(short_url)

        logger.info(
            "User %s created short URL %s -> %s",
            owner.id, short_url.short_code, short_url.target_url
        )
        return short_url

    def get_by_id(self, link_id: int) -> Optional[ShortURL]:
        return self.db.get(ShortURL, link_id)

    def get_owned(self, link_id: int, owner_id: int) -> Optional[ShortURL]:
        """Link by id, only if ``owner_id`` owns it"""
        return self.db.query(ShortURL).filter(
            ShortURL.id == link_id,
            ShortURL.owner_id == owner_id
        ).first()

    def get_by_short_code(self, short_code: str) -> Optional[ShortURL]:
        """Read-only lookup, does not count a click"""
        return self.db.query(ShortURL).filter(
            ShortURL.short_code == short_code
        ).first()

    def resolve(self, short_code: str) -> Optional[str]:
        """
        Count one click and return the target URL, or None if unknown.

        Unknown codes touch nothing. The counter is incremented in SQL
        (clicks = clicks + 1) rather than read-modify-write in Python.
        """
        short_url = self.get_by_short_code(short_code)
        if not short_url:
            return None

        target_url = short_url.target_url
        self.db.execute(
            update(ShortURL)
            .where(ShortURL.id == short_url.id)
            .values(clicks=ShortURL.clicks + 1)
        )
        self.db.commit()

        return target_url

    def delete_short_url(self, link_id: int, owner_id: int) -> bool:
        """
        Delete a link scoped by id and owner.

        Returns False when no such link belongs to ``owner_id``. Removing the
        row also removes it from the owner's short_urls list.
        """
        short_url = self.get_owned(link_id, owner_id)
        if not short_url:
            return False

        self.db.delete(short_url)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("User %s deleted short URL id=%s", owner_id, link_id)
        return True
