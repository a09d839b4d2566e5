"""
Short code generation strategies.
Uses Strategy Pattern to allow different generation algorithms.
"""

import string
import secrets
from abc import ABC, abstractmethod
from sqlalchemy.orm import Session
from shorturl_app.models.short_url import ShortURL
from shorturl_app.services.exceptions import ShortCodeGenerationError


# Paths owned by the app itself; a short code equal to one would be unreachable
RESERVED_CODES = frozenset({
    "login",
    "logout",
    "register",
    "shortUrls",
    "decode",
    "health",
    "docs",
    "redoc",
    "openapi.json",
    "static",
})


class ShortCodeStrategy(ABC):
    """Abstract base class for short code generation strategies"""

    @abstractmethod
    def generate(self, link_id: int, db_session: Session) -> str:
        """
        Generate a short code.

        Args:
            link_id: The database ID of the ShortURL record
            db_session: Database session for strategies that need to check uniqueness

        Returns:
            A unique short code string
        """
        pass


class RandomShortCodeStrategy(ShortCodeStrategy):
    """
    Random base62 string, checked against the database for uniqueness.

    Pros: Unpredictable, does not leak how many links exist
    Cons: One SELECT per attempt, collisions need a retry
    """

    def __init__(self, length: int = 7, max_retries: int = 5):
        self.length = length
        self.max_retries = max_retries
        self.characters = string.ascii_letters + string.digits

    def generate(self, link_id: int, db_session: Session) -> str:
        """Generate random short code with collision checking"""
        for attempt in range(self.max_retries):
            short_code = self._generate_random_string()

            if short_code in RESERVED_CODES:
                continue

            # Check if code already exists
            exists = db_session.query(ShortURL.id).filter(
                ShortURL.short_code == short_code
            ).first()
            if not exists:
                return short_code

        raise ShortCodeGenerationError(
            f"Could not generate unique short code after {self.max_retries} attempts"
        )

    def _generate_random_string(self) -> str:
        """Generate a random string of specified length"""
        return ''.join(secrets.choice(self.characters) for _ in range(self.length))


class Base62ShortCodeStrategy(ShortCodeStrategy):
    """
    Base62 encoding of the salted auto-increment ID.

    Pros: No collisions, no extra DB queries
    Cons: Predictable if salt is known
    """

    BASE62_CHARS = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"

    def __init__(self, salt: int = 1000, max_length: int = 7):
        self.salt = salt
        self.max_length = max_length

    def generate(self, link_id: int, db_session: Session) -> str:
        """
        Generate short code using Base62 encoding.

        If the encoded string exceeds max_length an error is raised:
        truncating would produce duplicates.
        """
        obfuscated_id = link_id + self.salt
        encoded = self._base62_encode(obfuscated_id)

        if len(encoded) > self.max_length:
            raise ShortCodeGenerationError(
                f"Generated code '{encoded}' exceeds max length {self.max_length}. "
                f"Link ID: {link_id}, Obfuscated ID: {obfuscated_id}."
            )

        return encoded

    def _base62_encode(self, number: int) -> str:
        """
        Convert integer to Base62 string.

        Base62 uses: 0-9 (10) + a-z (26) + A-Z (26) = 62 characters
        """
        if number == 0:
            return self.BASE62_CHARS[0]

        result = ""
        while number > 0:
            result = self.BASE62_CHARS[number % 62] + result
            number //= 62

        return result
