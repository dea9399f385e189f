from .base import (
    ReqlogError,
    ConfigurationError,
)

__all__ = ["ReqlogError", "ConfigurationError"]
