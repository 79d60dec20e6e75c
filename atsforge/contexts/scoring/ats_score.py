"""
LLM-based ATS scoring for the Scoring context.

Asks an LLM to compare resume text with a job description and return per-aspect
scores. Model output is untrusted: scores may be missing, fractional, strings,
or out of range, so every score is coerced to an integer in [0, 100].
"""

import math
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from typing import Any, Optional

from atsforge.contexts.scoring.exceptions import AtsScoringError
from atsforge.contexts.scoring.logger import _log_debug, _log_info, _log_success, _log_warning
from atsforge.utils.exceptions import EmptyResponseError, InvalidInputError
from atsforge.utils.json_extraction import extract_json_object
from atsforge.utils.llm import LLMProvider, get_provider
from atsforge.utils.text_processing import check_resume_text

MIN_SCORE = 0
MAX_SCORE = 100

SCORE_FIELDS = (
    "skills_match_score",
    "experience_match_score",
    "education_match_score",
    "keyword_match_score",
    "certifications_score",
    "job_title_alignment_score",
    "overall_ats_score",
)

# Scoring explanations are shorter than full resumes; near-deterministic output
SCORING_MAX_TOKENS = 1200
SCORING_TEMPERATURE = 0.2

# =============================================================================
# PROMPT TEMPLATES
# =============================================================================

_SYSTEM_PROMPT = """\
You are an expert Applicant Tracking System (ATS) evaluator with deep knowledge of
resume screening algorithms. Analyze how well a resume matches a job description
and provide a detailed, objective scoring analysis.

Rules:
- Output pure JSON only: no markdown, no backticks, no text outside the JSON
- All scores must be integers between 0 and 100
- Base scores on actual content matching, not potential or assumptions
- Cite actual skills, keywords, and requirements in explanations
- Give actionable improvement suggestions, not generic advice
- overall_ats_score is a weighted average: skills 30%, experience 30%,
  keywords 20%, education 10%, certifications 5%, job title 5%"""

_USER_PROMPT_TEMPLATE = """\
Evaluate the resume below against the job description. Assess skills match,
experience match, education match, keyword match, certifications, and job
title alignment. Explain each finding briefly.

Return a JSON object with exactly these fields:
{{
  "skills_match_score": <integer 0-100>,
  "experience_match_score": <integer 0-100>,
  "education_match_score": <integer 0-100>,
  "keyword_match_score": <integer 0-100>,
  "certifications_score": <integer 0-100>,
  "job_title_alignment_score": <integer 0-100>,
  "overall_ats_score": <integer 0-100>,
  "explanation": "Scoring methodology and key findings",
  "improvement_suggestions": "Specific, actionable recommendations"
}}

---
Resume Text:
{resume_text}

---
Job Description:
{job_description}"""


# =============================================================================
# SCORE STRUCTURE
# =============================================================================


@dataclass(frozen=True)
class AtsScore:
    """Per-aspect ATS scores, each an integer in [0, 100]."""

    skills_match_score: int = 0
    experience_match_score: int = 0
    education_match_score: int = 0
    keyword_match_score: int = 0
    certifications_score: int = 0
    job_title_alignment_score: int = 0
    overall_ats_score: int = 0
    explanation: str = ""
    improvement_suggestions: str = ""

    def to_dict(self) -> dict:
        return asdict(self)


def _clamp_score(value: Any) -> Optional[int]:
    """Round half-up and clamp to [0, 100]; None for non-numeric or non-finite values."""
    # bool is an int subclass but never a meaningful score
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return max(MIN_SCORE, min(MAX_SCORE, math.floor(value + 0.5)))


def normalize_ats_scores(parsed: Any) -> AtsScore:
    """
    Coerce a parsed model response into an AtsScore.

    Args:
        parsed: Dict recovered from the model response (not mutated)

    Returns:
        AtsScore with every score present and bounded

    Raises:
        InvalidInputError: If parsed is not an object
    """
    if not isinstance(parsed, Mapping):
        raise InvalidInputError("Invalid ATS score data: must be an object", parsed)

    scores = {}
    for score_field in SCORE_FIELDS:
        score = _clamp_score(parsed.get(score_field))
        if score is None:
            _log_warning(f"{score_field} is not a number, defaulting to 0")
            score = 0
        scores[score_field] = score

    explanation = parsed.get("explanation")
    suggestions = parsed.get("improvement_suggestions")

    return AtsScore(
        **scores,
        explanation=explanation if isinstance(explanation, str) else "",
        improvement_suggestions=suggestions if isinstance(suggestions, str) else "",
    )


# =============================================================================
# SCORING FUNCTIONS
# =============================================================================


def build_scoring_prompt(resume_text: str, job_description: str) -> str:
    """Build the user prompt for ATS scoring."""
    return _USER_PROMPT_TEMPLATE.format(resume_text=resume_text, job_description=job_description)


def generate_ats_score(
    resume_text: str,
    job_description: str,
    llm: Optional[LLMProvider] = None,
) -> AtsScore:
    """
    Score resume text against a job description using an LLM.

    Args:
        resume_text: Resume text (raw or optimized)
        job_description: Job description to compare against
        llm: Provider to use (default: get_provider() from environment)

    Returns:
        AtsScore with bounded integer scores

    Raises:
        ValueError: If resume text is too short or job description is blank
        EmptyResponseError: If the model returned no content
        AtsScoringError: If no JSON object could be recovered from the response
    """
    check_resume_text(resume_text)
    if not isinstance(job_description, str) or not job_description.strip():
        raise ValueError("Job description is required for ATS scoring")

    llm = llm or get_provider()
    _log_info(f"Calculating ATS score with {llm.name}")

    response = llm.generate(
        system_prompt=_SYSTEM_PROMPT,
        user_prompt=build_scoring_prompt(resume_text, job_description),
        max_tokens=SCORING_MAX_TOKENS,
        temperature=SCORING_TEMPERATURE,
    )

    text = (response.content or "").strip()
    if not text:
        raise EmptyResponseError(f"{llm.name} returned empty content")
    _log_debug(f"Raw ATS score response length: {len(text)} chars")

    parsed = extract_json_object(text)
    if parsed is None:
        raise AtsScoringError("Failed to extract valid ATS score JSON", response_snippet=text)

    score = normalize_ats_scores(parsed)
    _log_success(f"ATS score calculated: {score.overall_ats_score}/100")
    return score
