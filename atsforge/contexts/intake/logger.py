"""
Intake context logger.

Provides logging interface for the intake context with automatic [intake] prefix.
All intake modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from atsforge.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[intake]"


def setup_intake_logger(log_dir: Path, provider_name: str = None) -> Path:
    """
    Setup logger for intake context.

    Args:
        log_dir: Directory for this intake session
        provider_name: LLM provider name for provenance (e.g., "openai/gpt-4o-mini")

    Returns:
        Path to log file
    """
    extra = {"LLM provider": provider_name} if provider_name else None
    return _setup_logger(context_name="intake", log_dir=log_dir, extra_provenance=extra)


# Wrapper functions with automatic [intake] prefix


def _log_info(message: str) -> None:
    """Log info message with [intake] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [intake] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [intake] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [intake] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [intake] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level intake-specific logging helpers


def log_validation_summary(record) -> None:
    """
    Log a one-block summary of a validated resume.

    Args:
        record: ResumeRecord returned by validate_resume()
    """
    filled_skill_categories = sum(1 for values in record.skills.to_dict().values() if values)
    _log_debug("Resume validation complete:")
    _log_debug(f"  - Name: {record.name}")
    _log_debug(f"  - Experience entries: {len(record.experience)}")
    _log_debug(f"  - Education entries: {len(record.education)}")
    _log_debug(f"  - Projects: {len(record.projects)}")
    _log_debug(f"  - Skills categories: {filled_skill_categories}")


def log_generation_result(result, elapsed_time: float) -> None:
    """
    Log the outcome of a resume generation run.

    Args:
        result: GenerationResult from generate_resume()
        elapsed_time: Time taken in seconds
    """
    if result.success:
        _log_success(f"Resume generation succeeded ({elapsed_time:.2f}s)")
        return

    # Thin data still yields a record, so it is reported as a warning
    log = _log_warning if result.resume is not None else _log_error
    log(f"Resume generation did not succeed ({elapsed_time:.2f}s)")
    log(f"  Status: {result.status.value}")
    if result.error:
        log(f"  Error: {result.error}")
