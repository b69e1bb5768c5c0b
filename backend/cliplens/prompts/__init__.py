"""
Centralized prompts for all AI services.
"""
from cliplens.prompts.engineer_prompts import (
    ENGINEER_SYSTEM_PROMPT,
    ENGINEER_MAX_TOKENS,
)
from cliplens.prompts.analysis_prompts import SUMMARY_PROMPT

__all__ = [
    # Prompt engineering
    "ENGINEER_SYSTEM_PROMPT",
    "ENGINEER_MAX_TOKENS",
    # Video analysis
    "SUMMARY_PROMPT",
]
