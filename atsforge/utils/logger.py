"""
Session logging for atsforge runs.

Every CLI run gets its own log directory holding one DEBUG-level file per
context, plus an INFO console stream on stderr (stdout stays free for JSON
output). Each session starts with a provenance header recording the atsforge
version and the LLM configuration the run was made with, so a saved log can
be matched to the model that produced the output it describes.

Context-specific wrappers are defined in contexts/{context}/logger.py.
"""

import os
import sys
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv
from loguru import logger

from atsforge import __version__

load_dotenv()

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"

# Console colors; WARNING is the level thin-data results are reported at
LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}

# Settings read by atsforge.utils.llm.get_provider
_LLM_SETTINGS = ("LLM_PROVIDER", "LLM_MODEL", "OPENAI_BASE_URL")

_HEADER_RULE = "=" * 80


def collect_provenance(extra: Optional[Dict[str, object]] = None) -> Dict[str, str]:
    """
    Gather the provenance fields for a session header.

    Unset LLM settings are recorded as "(unset)" so the header shows which
    provider defaults applied.

    Args:
        extra: Caller-specific fields appended after the standard ones
               (e.g., {"LLM provider": "openai/gpt-4o-mini"})

    Returns:
        Ordered mapping of field label to value
    """
    fields = {
        "atsforge": __version__,
        "Python": sys.version.split()[0],
        "Command": " ".join(sys.argv),
        "Working directory": str(Path.cwd()),
    }
    for name in _LLM_SETTINGS:
        fields[name] = os.getenv(name) or "(unset)"

    for key, value in (extra or {}).items():
        fields[key] = str(value)
    return fields


def log_provenance(extra: Optional[Dict[str, object]] = None) -> None:
    """Write the provenance header to every active sink."""
    logger.info(_HEADER_RULE)
    for label, value in collect_provenance(extra).items():
        logger.info(f"{label}: {value}")
    logger.info(_HEADER_RULE)


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: dict = None,
    level_colors: dict = None,
) -> Path:
    """
    Start a logging session for one context.

    Replaces any existing loguru sinks, so the last call wins when a script
    sets up more than one context.

    Args:
        context_name: Context identifier ("intake" or "scoring"); names the log file
        log_dir: Directory for this logging session (created if missing)
        extra_provenance: Additional fields for the provenance header
        level_colors: Override console level colors (e.g., {"INFO": "<cyan>"})

    Returns:
        Path to the session's log file

    Example:
        log_file = setup_logger(
            context_name="intake",
            log_dir=Path("outs/logs/generate_20261018_123456"),
            extra_provenance={"LLM provider": "openai/gpt-4o-mini"},
        )
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in {**LEVEL_COLORS, **(level_colors or {})}.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level="INFO", colorize=True)

    log_provenance(extra_provenance)
    return log_file
