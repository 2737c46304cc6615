import logging
import os

_DEFAULT_LOG_LEVEL = "WARNING"


def get_log_level(verbose: bool = False) -> int:
    if verbose:
        return logging.DEBUG
    name = os.getenv("RSC_GUARDIAN_LOG_LEVEL", _DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"Invalid RSC_GUARDIAN_LOG_LEVEL '{name}'")
    return level


def get_default_language() -> str | None:
    """Grammar override applied when no explicit language is given."""
    return os.getenv("RSC_GUARDIAN_LANGUAGE") or None


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=get_log_level(verbose),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
