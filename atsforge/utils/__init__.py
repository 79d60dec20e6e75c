"""
Shared utilities for atsforge.

Common functionality used across contexts:
- Tolerant JSON recovery from model output
- LLM provider abstraction
- Logger configuration
- Errors and input checks shared by the intake and scoring contexts
"""

from atsforge.utils.json_extraction import extract_json_object

__all__ = ["extract_json_object"]
