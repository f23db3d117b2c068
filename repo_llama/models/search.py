"""
Search request/response schemas.

Dependencies: pydantic
System role: Similarity search API contracts
"""

from pydantic import AliasChoices, BaseModel, Field

from repo_llama.models.fragment import ScoredFragment


class SearchRequest(BaseModel):
    """Request schema for similarity search."""

    query: str | None = Field(default=None, description="Natural-language query")
    context_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("context_name", "contextName"),
        description="Context to search",
    )
    k: int | None = Field(default=None, ge=0, description="Number of results (defaults to settings)")


class SearchResponse(BaseModel):
    """Ranked fragments for a query."""

    results: list[ScoredFragment]
