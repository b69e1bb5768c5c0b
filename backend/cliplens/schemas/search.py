"""
Pydantic schemas for the search and prompt-engineering endpoints.

Field aliases match the camelCase names the browser sends. Every field is
optional at the schema level so that a missing value is reported as a 400
by the route instead of FastAPI's 422.
"""
from typing import Optional

from pydantic import BaseModel, Field


class SearchRequest(BaseModel):
    """Request body for a clip search."""
    index_id: Optional[str] = Field(default=None, alias="indexId")
    prompt: Optional[str] = Field(default=None, description="Search query text")
    api_key: Optional[str] = Field(default=None, alias="apiKey")
    page_limit: Optional[int] = Field(default=None, alias="pageLimit", ge=1)

    model_config = {"populate_by_name": True}


class EngineerPromptRequest(BaseModel):
    """Request body for rewriting a raw prompt."""
    prompt: Optional[str] = None


class EngineerPromptResponse(BaseModel):
    """Engineered prompt returned to the browser."""
    engineered_prompt: str = Field(..., alias="engineeredPrompt")

    model_config = {"populate_by_name": True}
