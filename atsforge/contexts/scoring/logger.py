"""
Scoring context logger.

Provides logging interface for the scoring context with automatic [scoring] prefix.
"""

from pathlib import Path

from loguru import logger

from atsforge.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[scoring]"


def setup_scoring_logger(log_dir: Path, provider_name: str = None) -> Path:
    """
    Setup logger for scoring context.

    Args:
        log_dir: Directory for this scoring session
        provider_name: LLM provider name for provenance

    Returns:
        Path to log file
    """
    extra = {"LLM provider": provider_name} if provider_name else None
    return _setup_logger(context_name="scoring", log_dir=log_dir, extra_provenance=extra)


def _log_info(message: str) -> None:
    """Log info message with [scoring] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [scoring] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [scoring] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [scoring] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
