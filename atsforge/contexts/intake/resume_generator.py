"""
LLM-based resume generation for the Intake context.

Sends raw resume text (and optionally a target job description) to an LLM,
recovers the JSON it returns, and normalizes it into a ResumeRecord.

The pipeline reports three distinct failure signals so callers can surface
them differently:
- NO_STRUCTURED_DATA: no JSON object could be recovered from the response
- INVALID_STRUCTURE: the recovered value was not a resume-shaped object
- INSUFFICIENT_DATA: a record was built but is too thin to be useful
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from atsforge.contexts.intake.logger import _log_debug, _log_info, _log_success, _log_warning
from atsforge.contexts.intake.resume_record import ResumeRecord
from atsforge.contexts.intake.validator import has_minimum_resume_data, validate_resume
from atsforge.utils.exceptions import EmptyResponseError, InvalidInputError
from atsforge.utils.json_extraction import extract_json_object
from atsforge.utils.llm import LLMProvider, get_provider
from atsforge.utils.text_processing import check_resume_text

# Structured resumes are long; a low temperature keeps output consistent
GENERATION_MAX_TOKENS = 4000
GENERATION_TEMPERATURE = 0.3

# =============================================================================
# PROMPT TEMPLATES
# =============================================================================

_SCHEMA_EXAMPLE = {
    "name": "",
    "profile_summary": "",
    "contact": {
        "email": "",
        "phone": "",
        "location": "",
        "github": "",
        "linkedin": "",
        "website": "",
    },
    "skills": {"languages": [], "frameworks": [], "tools": [], "soft_skills": []},
    "education": [
        {"institution": "", "location": "", "degree": "", "start": "", "end": "", "details": []}
    ],
    "experience": [
        {"company": "", "title": "", "location": "", "start": "", "end": "", "bullets": []}
    ],
    "projects": [{"name": "", "role": "", "start": "", "end": "", "url": "", "bullets": []}],
    "certifications": [{"name": "", "issuer": "", "year": ""}],
    "achievements": [],
}

_SYSTEM_PROMPT = f"""\
You are an expert ATS resume optimization engine.
Your ONLY task is to output a SINGLE valid JSON object that extracts and optimizes resume data.

Rules:
- Output pure JSON only: no markdown, no backticks, no comments
- Every schema field must be present (use "" or [] when data is missing)
- Never fabricate information; only use data from the resume text
- Never rename keys or add keys that are not in the schema
- Dates are plain text strings (e.g., "Jan 2020", "2019-2021")
- Strings must be properly escaped for JSON

Schema:
{json.dumps(_SCHEMA_EXAMPLE, indent=2)}"""

_USER_PROMPT_TEMPLATE = """\
Extract and optimize the following resume for applicant tracking systems.

---
Resume Text:
{resume_text}

---
Job Description:
{job_description}

---
Return ONLY the JSON object. It must be parseable without any preprocessing."""

_NO_JOB_DESCRIPTION = (
    "No specific job description provided. Optimize for general ATS compatibility."
)


# =============================================================================
# RESULT TYPES
# =============================================================================


class GenerationStatus(Enum):
    SUCCESS = "success"
    NO_STRUCTURED_DATA = "no_structured_data"
    INVALID_STRUCTURE = "invalid_structure"
    INSUFFICIENT_DATA = "insufficient_data"


@dataclass
class GenerationResult:
    """
    Outcome of generate_resume().

    Attributes:
        status: Which stage the run ended at
        resume: Validated record (present for SUCCESS and INSUFFICIENT_DATA)
        error: Human-readable reason when status is not SUCCESS
    """

    status: GenerationStatus
    resume: Optional[ResumeRecord] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.status is GenerationStatus.SUCCESS


# =============================================================================
# GENERATION FUNCTIONS
# =============================================================================


def build_resume_prompt(resume_text: str, job_description: Optional[str] = None) -> str:
    """
    Build the user prompt for resume extraction.

    Args:
        resume_text: Raw text extracted from a resume file
        job_description: Target job description (general ATS optimization if omitted)

    Returns:
        User prompt string for the LLM
    """
    if not job_description or not job_description.strip():
        job_description = _NO_JOB_DESCRIPTION

    return _USER_PROMPT_TEMPLATE.format(resume_text=resume_text, job_description=job_description)


def request_resume_json(
    resume_text: str,
    job_description: Optional[str] = None,
    llm: Optional[LLMProvider] = None,
) -> Optional[dict]:
    """
    Ask the LLM for structured resume JSON and recover it from the response.

    Args:
        resume_text: Raw resume text
        job_description: Optional target job description
        llm: Provider to use (default: get_provider() from environment)

    Returns:
        Loosely-typed dict recovered from the response, or None if no JSON
        object could be extracted

    Raises:
        ValueError: If resume_text is too short
        EmptyResponseError: If the model returned no content
    """
    check_resume_text(resume_text)
    llm = llm or get_provider()

    response = llm.generate(
        system_prompt=_SYSTEM_PROMPT,
        user_prompt=build_resume_prompt(resume_text, job_description),
        max_tokens=GENERATION_MAX_TOKENS,
        temperature=GENERATION_TEMPERATURE,
    )

    text = (response.content or "").strip()
    if not text:
        raise EmptyResponseError(f"{llm.name} returned empty content")

    _log_debug(f"Raw response length: {len(text)} chars")
    _log_debug(f"First 200 chars: {text[:200]}")

    parsed = extract_json_object(text)
    if parsed is not None and not parsed.get("name") and not parsed.get("contact"):
        _log_warning("Missing critical fields (name/contact) in parsed resume")

    return parsed


def generate_resume(
    resume_text: str,
    job_description: Optional[str] = None,
    llm: Optional[LLMProvider] = None,
) -> GenerationResult:
    """
    Generate a validated, ATS-optimized resume record from raw resume text.

    Steps:
    1. Request structured JSON from the LLM and recover it
    2. Validate and normalize it into a ResumeRecord
    3. Check the record has minimum usable content

    Provider errors (network, authentication, rate limits after retries)
    propagate to the caller, as do ValueError for too-short resume text
    and EmptyResponseError for an empty model response.

    Args:
        resume_text: Raw text extracted from a resume file
        job_description: Optional target job description
        llm: Provider to use (default: get_provider() from environment)

    Returns:
        GenerationResult describing the outcome
    """
    check_resume_text(resume_text)
    _log_info(f"Generating resume from {len(resume_text)} chars of text")
    if job_description:
        _log_debug(f"Job description length: {len(job_description)} chars")

    parsed = request_resume_json(resume_text, job_description, llm=llm)
    if parsed is None:
        return GenerationResult(
            status=GenerationStatus.NO_STRUCTURED_DATA,
            error="Failed to extract valid JSON from AI response",
        )

    try:
        record = validate_resume(parsed)
    except InvalidInputError as e:
        return GenerationResult(
            status=GenerationStatus.INVALID_STRUCTURE,
            error=f"Validation failed: {e}",
        )

    if not has_minimum_resume_data(record):
        _log_warning("Resume appears to have insufficient data")
        return GenerationResult(
            status=GenerationStatus.INSUFFICIENT_DATA,
            resume=record,
            error="Resume data is incomplete or missing critical information",
        )

    _log_success("Resume generation and validation complete")
    return GenerationResult(status=GenerationStatus.SUCCESS, resume=record)
