"""
Fixed-window text chunker.

Splits file text into overlapping character windows. Boundaries are plain
character offsets, so a fragment may start or end in the middle of an
identifier.

Dependencies: repo_llama.core.exceptions
System role: First stage of repository ingestion
"""

from repo_llama.core.exceptions import ValidationError

DEFAULT_CHUNK_SIZE = 1000
DEFAULT_CHUNK_OVERLAP = 200


def validate_window(size: int, overlap: int) -> None:
    """
    Check chunk window parameters.

    Raises:
        ValidationError: When size <= 0, overlap < 0 or overlap >= size
    """
    if size <= 0:
        raise ValidationError("Chunk size must be positive", field="size", details={"size": size})
    if overlap < 0:
        raise ValidationError(
            "Chunk overlap cannot be negative", field="overlap", details={"overlap": overlap}
        )
    if overlap >= size:
        raise ValidationError(
            "Chunk overlap must be smaller than chunk size",
            field="overlap",
            details={"size": size, "overlap": overlap},
        )


def chunk_text(
    text: str,
    size: int = DEFAULT_CHUNK_SIZE,
    overlap: int = DEFAULT_CHUNK_OVERLAP,
) -> list[str]:
    """
    Split text into windows of `size` characters advancing by `size - overlap`.

    Every character lands in at least one window, and consecutive windows
    share exactly `overlap` characters; only the last one may be shorter.

    Args:
        text: Raw file text
        size: Window size in characters
        overlap: Characters shared by consecutive windows

    Returns:
        list[str]: Windows in file order (empty for empty text)

    Raises:
        ValidationError: When the window parameters are invalid
    """
    validate_window(size, overlap)

    step = size - overlap
    return [text[start:start + size] for start in range(0, len(text), step)]
