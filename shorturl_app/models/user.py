from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from shorturl_app.database.connection import Base


class User(Base):
    """
    Registered user.

    - username is unique at the database level, so two concurrent
      registrations of the same name cannot both succeed
    - password_hash is a bcrypt hash, the plaintext is never stored
    - short_urls is the user's owned-link list, backed by short_urls.owner_id
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    username = Column(String(64), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    short_urls = relationship(
        "ShortURL",
        back_populates="owner",
        order_by="ShortURL.id",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<User(id={self.id}, username={self.username})>"
