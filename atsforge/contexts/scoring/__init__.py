"""
Scoring Context

Responsibilities:
- Asks an LLM to score resume text against a job description
- Normalizes the returned scores into a bounded, fully typed AtsScore

Owns: ATS score schema and clamping rules
Never: Modifies resume content
"""

from atsforge.contexts.scoring.ats_score import (
    SCORE_FIELDS,
    AtsScore,
    generate_ats_score,
    normalize_ats_scores,
)
from atsforge.contexts.scoring.exceptions import AtsScoringError

__all__ = [
    "SCORE_FIELDS",
    "AtsScore",
    "AtsScoringError",
    "generate_ats_score",
    "normalize_ats_scores",
]
