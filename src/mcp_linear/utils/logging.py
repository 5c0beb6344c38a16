"""Logging helpers shared by configuration and startup code."""

import logging


def mask_sensitive(value: str | None, keep_chars: int = 4) -> str:
    """Mask a secret, keeping only its first and last few characters.

    Args:
        value: The secret to mask
        keep_chars: Number of characters to keep at each end

    Returns:
        The masked value, or ``"Not Provided"`` when empty.
    """
    if not value:
        return "Not Provided"
    if len(value) <= keep_chars * 2:
        return "*" * len(value)
    middle = "*" * (len(value) - keep_chars * 2)
    return f"{value[:keep_chars]}{middle}{value[-keep_chars:]}"


def log_config_param(
    logger: logging.Logger,
    service: str,
    param: str,
    value: str | None,
    sensitive: bool = False,
) -> None:
    """Log a configuration parameter, masking it when sensitive.

    Args:
        logger: The logger to use
        service: The service name (e.g. 'Linear')
        param: The parameter name
        value: The parameter value
        sensitive: Whether the value should be masked
    """
    display_value = mask_sensitive(value) if sensitive else (value or "Not Provided")
    logger.info(f"{service} {param}: {display_value}")
