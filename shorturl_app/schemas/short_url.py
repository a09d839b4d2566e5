from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional
from datetime import datetime


class ShortURLCreate(BaseModel):
    """Form body of POST /shortUrls (the HTML form field is ``fullUrl``)"""
    full_url: str = Field(..., alias="fullUrl", max_length=2048,
                          description="The URL to be shortened")

    @field_validator("full_url")
    @classmethod
    def strip_and_require(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("fullUrl must not be empty")
        return value


class ShortURLResponse(BaseModel):
    """Created link, serialized from the SQLAlchemy model.

    from_attributes=True reads the ORM attributes; serialization_alias gives
    the camelCase keys the browser code expects.
    """
    id: int
    short_code: str = Field(serialization_alias="shortCode")
    target_url: str = Field(serialization_alias="targetUrl")
    clicks: int
    created_at: Optional[datetime] = Field(default=None, serialization_alias="createdAt")
    owner_id: int = Field(serialization_alias="ownerId")

    model_config = ConfigDict(from_attributes=True)


class ShortURLDecoded(BaseModel):
    """Public, read-only view returned by GET /decode/{short_code}"""
    full: str
    short: str
    clicks: int
    date: Optional[datetime] = None
