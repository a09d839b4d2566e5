from pydantic import BaseModel, Field, field_validator

from shorturl_app.security.passwords import BCRYPT_MAX_BYTES


class Credentials(BaseModel):
    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        # bcrypt only hashes the first 72 bytes, so longer passwords would
        # collide on their prefix
        if len(value.encode("utf-8")) > BCRYPT_MAX_BYTES:
            raise ValueError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes")
        return value


class LoginForm(Credentials):
    pass


class RegisterForm(Credentials):
    pass
