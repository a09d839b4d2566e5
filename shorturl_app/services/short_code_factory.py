"""
Builds the short code strategy named in the settings.

No instance is cached here: ``dependencies.get_short_code_strategy`` calls
this per request, and strategies are cheap, stateless objects.
"""

from enum import Enum

from shorturl_app.config import Settings
from shorturl_app.services.short_code_strategies import (
    ShortCodeStrategy,
    RandomShortCodeStrategy,
    Base62ShortCodeStrategy
)


class ShortCodeStrategyType(Enum):
    """Values accepted by the SHORT_CODE_STRATEGY setting"""
    RANDOM = "random"
    BASE62 = "base62"


def create_short_code_strategy(app_settings: Settings) -> ShortCodeStrategy:
    """
    Raises:
        ValueError: SHORT_CODE_STRATEGY is not one of ShortCodeStrategyType
    """
    strategy_type = ShortCodeStrategyType(app_settings.short_code_strategy)

    if strategy_type == ShortCodeStrategyType.BASE62:
        return Base62ShortCodeStrategy(
            salt=app_settings.short_code_salt,
            max_length=app_settings.short_code_length
        )

    return RandomShortCodeStrategy(
        length=app_settings.short_code_length,
        max_retries=app_settings.max_retries
    )
