from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from shorturl_app.database.connection import Base


class ShortURL(Base):
    """
    A short alias pointing at a full URL, owned by exactly one user.

    The short_code is nullable only between the INSERT and the code
    generation step: some strategies need the auto-increment id first.
    """
    __tablename__ = "short_urls"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    # unique=True also creates the index used by redirects
    short_code = Column(String(16), unique=True, nullable=True, index=True)
    target_url = Column(String(2048), nullable=False)
    clicks = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    owner = relationship("User", back_populates="short_urls")

    def __repr__(self):
        return f"<ShortURL(id={self.id}, short_code={self.short_code})>"
