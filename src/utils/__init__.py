"""Utility modules."""
from .logger import get_logger, configure_logging
from .metrics import registry

__all__ = ["get_logger", "configure_logging", "registry"]
