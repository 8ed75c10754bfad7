"""
dtrange._config is considered explicitly upstream of everything else in
dtrange, should have no intra-dtrange dependencies.
"""
__all__ = [
    "config",
    "get_option",
    "set_option",
    "reset_option",
    "describe_option",
    "option_context",
    "options",
]
from dtrange._config import config
from dtrange._config.config import (
    describe_option,
    get_option,
    option_context,
    options,
    reset_option,
    set_option,
)
