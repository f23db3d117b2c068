"""
Fragment domain models.

A fragment is a window of source text plus its embedding; a collection is the
named, ordered set of fragments produced by one ingestion run.

Dependencies: pydantic
System role: Unit of retrieval
"""

from pydantic import BaseModel, Field, FiniteFloat


class Fragment(BaseModel):
    """Chunk of a source file with its embedding vector."""

    source: str = Field(description="Path of the originating file")
    text: str = Field(description="Literal substring of the source file")
    embedding: list[FiniteFloat] = Field(description="Embedding vector, finite components only")


class ScoredFragment(Fragment):
    """Fragment with its similarity to a query."""

    score: float = Field(description="Cosine similarity in [-1, 1]")


class Collection(BaseModel):
    """Named, immutable set of fragments sharing one embedding space."""

    name: str
    fragments: list[Fragment] = Field(default_factory=list)

    @property
    def dimension(self) -> int | None:
        """Embedding dimension, or None for an empty collection."""
        if not self.fragments:
            return None
        return len(self.fragments[0].embedding)
