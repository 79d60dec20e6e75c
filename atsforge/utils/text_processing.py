"""
Input checks for text sent to an LLM.
"""

MIN_RESUME_TEXT_LENGTH = 50


def check_resume_text(resume_text) -> str:
    """
    Ensure resume text is long enough to be worth sending to an LLM.

    Raises:
        ValueError: If resume_text is not a string or is shorter than
                    MIN_RESUME_TEXT_LENGTH after stripping
    """
    if not isinstance(resume_text, str) or len(resume_text.strip()) < MIN_RESUME_TEXT_LENGTH:
        raise ValueError("Resume text is too short or empty")
    return resume_text
