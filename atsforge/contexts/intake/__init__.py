"""
Intake Context

Responsibilities:
- Recovers structured resume JSON from language-model output
- Validates and normalizes it into a canonical ResumeRecord
- Judges whether a record carries enough substance to be useful

Owns: Canonical resume schema, normalization rules, generation pipeline
Never: Renders documents or computes scores
"""

from atsforge.contexts.intake.resume_generator import (
    GenerationResult,
    GenerationStatus,
    generate_resume,
    request_resume_json,
)
from atsforge.contexts.intake.resume_record import (
    MISSING_NAME_PLACEHOLDER,
    Certification,
    Contact,
    EducationEntry,
    ExperienceEntry,
    ProjectEntry,
    ResumeRecord,
    Skills,
)
from atsforge.contexts.intake.validator import has_minimum_resume_data, validate_resume
from atsforge.utils.exceptions import EmptyResponseError, InvalidInputError

__all__ = [
    # Normalization
    "validate_resume",
    "has_minimum_resume_data",
    "InvalidInputError",
    "EmptyResponseError",
    # Generation pipeline
    "generate_resume",
    "request_resume_json",
    "GenerationResult",
    "GenerationStatus",
    # Data structure classes
    "ResumeRecord",
    "Contact",
    "Skills",
    "EducationEntry",
    "ExperienceEntry",
    "ProjectEntry",
    "Certification",
    "MISSING_NAME_PLACEHOLDER",
]
