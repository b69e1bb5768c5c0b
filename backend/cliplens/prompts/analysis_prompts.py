"""
Prompts sent to the video provider when generating card metadata.
"""

SUMMARY_PROMPT = "Create a concise, one-paragraph summary of the video content."
