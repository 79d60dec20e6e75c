"""
Canonical Resume Record

Defines the fully populated, immutable resume structure produced by
validate_resume(). Every field is always present with its declared type,
so renderers and scorers can access fields without checks.

Sequences are tuples so a record cannot be altered after validation;
to_dict() gives the JSON-ready form with lists.
"""

from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any, Dict, Tuple

# Placeholder used when the source has no usable name
MISSING_NAME_PLACEHOLDER = "Name Not Found"


def _to_plain(value: Any) -> Any:
    """Recursively convert dataclasses and tuples to dicts and lists."""
    if is_dataclass(value):
        return {f.name: _to_plain(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, tuple):
        return [_to_plain(item) for item in value]
    return value


class _PlainDictMixin:
    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dict (tuples become lists)."""
        return _to_plain(self)


@dataclass(frozen=True)
class Contact(_PlainDictMixin):
    """Contact block; every field is a string, empty when unknown."""

    email: str = ""
    phone: str = ""
    location: str = ""
    github: str = ""
    linkedin: str = ""
    website: str = ""


@dataclass(frozen=True)
class Skills(_PlainDictMixin):
    """
    Skill categories.

    Attributes:
        languages: Programming or spoken languages
        frameworks: Frameworks and libraries
        tools: Tools and platforms
        soft_skills: Interpersonal skills
    """

    languages: Tuple[str, ...] = ()
    frameworks: Tuple[str, ...] = ()
    tools: Tuple[str, ...] = ()
    soft_skills: Tuple[str, ...] = ()


@dataclass(frozen=True)
class EducationEntry(_PlainDictMixin):
    institution: str = ""
    location: str = ""
    degree: str = ""
    start: str = ""
    end: str = ""
    details: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ExperienceEntry(_PlainDictMixin):
    company: str = ""
    title: str = ""
    location: str = ""
    start: str = ""
    end: str = ""
    bullets: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ProjectEntry(_PlainDictMixin):
    name: str = ""
    role: str = ""
    start: str = ""
    end: str = ""
    url: str = ""
    bullets: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Certification(_PlainDictMixin):
    name: str = ""
    issuer: str = ""
    year: str = ""


@dataclass(frozen=True)
class ResumeRecord(_PlainDictMixin):
    """
    Fully typed, fully defaulted resume.

    Built once per validate_resume() call and held only for the duration of
    one operation (scoring, rendering). Dates are free-form strings exactly as
    the source gave them (e.g., "Jan 2020", "2019-2021").

    Attributes:
        name: Candidate name, MISSING_NAME_PLACEHOLDER when absent
        profile_summary: Professional summary, may be empty
        contact: Contact details
        skills: Skill categories
        education: Education entries in source order
        experience: Work experience entries in source order
        projects: Project entries in source order
        certifications: Certifications in source order
        achievements: Non-empty achievement strings
    """

    name: str = MISSING_NAME_PLACEHOLDER
    profile_summary: str = ""
    contact: Contact = field(default_factory=Contact)
    skills: Skills = field(default_factory=Skills)
    education: Tuple[EducationEntry, ...] = ()
    experience: Tuple[ExperienceEntry, ...] = ()
    projects: Tuple[ProjectEntry, ...] = ()
    certifications: Tuple[Certification, ...] = ()
    achievements: Tuple[str, ...] = ()
