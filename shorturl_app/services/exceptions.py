"""Domain errors raised by the service layer and mapped to HTTP by the app."""


class ShortURLAppError(Exception):
    """Base class for application errors"""


class UsernameAlreadyExistsError(ShortURLAppError):
    def __init__(self, username: str):
        super().__init__(f"Username already exists: {username}")
        self.username = username


class NotAuthenticatedError(ShortURLAppError):
    """Raised by the auth gate when the session has no valid user"""


class ShortCodeGenerationError(ShortURLAppError):
    """The configured strategy could not produce a usable short code"""
