"""
atsforge - structured resume intake and ATS scoring

Turns language-model output describing a resume into a validated, fully
populated record that renderers and scorers can consume without checks.

Architecture:
- Intake Context: Model output recovery, resume normalization, generation pipeline
- Scoring Context: Model-based ATS scoring against a job description
"""

__version__ = "0.1.0"
