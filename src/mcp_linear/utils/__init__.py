"""
Utility functions for the MCP Linear integration.
"""

from .env import getenv_first, is_env_extended_truthy
from .logging import log_config_param, mask_sensitive
from .markdown import extract_embedded_images

__all__ = [
    "extract_embedded_images",
    "getenv_first",
    "is_env_extended_truthy",
    "log_config_param",
    "mask_sensitive",
]
