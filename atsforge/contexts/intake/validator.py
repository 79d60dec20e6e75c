"""
Resume validation and normalization for the Intake context.

Converts an arbitrary parsed JSON value (typically extracted from model output)
into a ResumeRecord. All type coercion lives here so downstream code can
use the record without checks.

Only one condition is fatal: a root that is not an object. Anything missing,
mistyped, or extra inside the object is silently defaulted or dropped.
"""

from collections.abc import Mapping
from dataclasses import fields
from typing import Any, Tuple, Type, TypeVar

from atsforge.contexts.intake.logger import log_validation_summary
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
from atsforge.utils.exceptions import InvalidInputError

T = TypeVar("T")

# JSON arrays arrive as lists; tuples come from re-validating a record
_SEQUENCE_TYPES = (list, tuple)


# =============================================================================
# FIELD COERCION
# =============================================================================


def _get(source: Any, key: str) -> Any:
    """Safe field access: None unless source is a mapping holding key."""
    if isinstance(source, Mapping):
        return source.get(key)
    return None


def _ensure_string(value: Any, default: str = "") -> str:
    return value if isinstance(value, str) else default


def _ensure_sequence(value: Any) -> Tuple[Any, ...]:
    return tuple(value) if isinstance(value, _SEQUENCE_TYPES) else ()


def _ensure_string_array(value: Any) -> Tuple[str, ...]:
    """Keep string elements that are non-blank after stripping, in order."""
    return tuple(
        item for item in _ensure_sequence(value) if isinstance(item, str) and item.strip()
    )


def _build_flat(cls: Type[T], source: Any) -> T:
    """
    Build a flat record dataclass from an untrusted source.

    Fields declared with a tuple default are string arrays; every other field
    is a string. A non-mapping source yields a fully defaulted instance.
    """
    values = {}
    for f in fields(cls):
        raw = _get(source, f.name)
        if f.default == ():
            values[f.name] = _ensure_string_array(raw)
        else:
            values[f.name] = _ensure_string(raw, f.default)
    return cls(**values)


def _build_entries(cls: Type[T], value: Any) -> Tuple[T, ...]:
    return tuple(_build_flat(cls, item) for item in _ensure_sequence(value))


# =============================================================================
# PUBLIC API
# =============================================================================


def validate_resume(data: Any) -> ResumeRecord:
    """
    Validate and normalize resume data into a ResumeRecord.

    Args:
        data: Parsed JSON value purporting to be a resume, or an existing
              ResumeRecord (re-validation returns an equal record)

    Returns:
        ResumeRecord with every field present and correctly typed

    Raises:
        InvalidInputError: If data is not an object (None, primitive, or array)

    Example:
        >>> record = validate_resume({"name": "Alice", "skills": {"languages": ["Go", 42, ""]}})
        >>> record.skills.languages
        ('Go',)
    """
    if isinstance(data, ResumeRecord):
        data = data.to_dict()

    if not isinstance(data, Mapping):
        raise InvalidInputError("Invalid resume data: must be an object", data)

    record = ResumeRecord(
        name=_ensure_string(data.get("name"), MISSING_NAME_PLACEHOLDER),
        profile_summary=_ensure_string(data.get("profile_summary")),
        contact=_build_flat(Contact, data.get("contact")),
        skills=_build_flat(Skills, data.get("skills")),
        education=_build_entries(EducationEntry, data.get("education")),
        experience=_build_entries(ExperienceEntry, data.get("experience")),
        projects=_build_entries(ProjectEntry, data.get("projects")),
        certifications=_build_entries(Certification, data.get("certifications")),
        achievements=_ensure_string_array(data.get("achievements")),
    )

    log_validation_summary(record)
    return record


def has_minimum_resume_data(record: ResumeRecord) -> bool:
    """
    Check whether a validated resume carries enough substance to be useful.

    This is a coarse gate on content, not on shape (validate_resume already
    guarantees shape). Requires a real name plus at least one of: email or
    phone, an experience entry, an education entry, or any skill.

    Args:
        record: ResumeRecord from validate_resume()

    Returns:
        True if the resume has sufficient data
    """
    has_name = bool(record.name.strip()) and record.name != MISSING_NAME_PLACEHOLDER
    has_contact = bool(record.contact.email or record.contact.phone)
    has_experience = len(record.experience) > 0
    has_education = len(record.education) > 0
    has_skills = any(
        (
            record.skills.languages,
            record.skills.frameworks,
            record.skills.tools,
            record.skills.soft_skills,
        )
    )

    return has_name and (has_contact or has_experience or has_education or has_skills)
