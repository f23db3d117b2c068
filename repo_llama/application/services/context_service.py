"""
Context management service.

Lists and deletes stored contexts.

Dependencies: repo_llama.boundary.store
System role: Context lifecycle operations
"""

from fastapi.concurrency import run_in_threadpool

from repo_llama.boundary.store import FragmentStore
from repo_llama.core.exceptions import ValidationError
from repo_llama.models.context import ContextInfo


class ContextService:
    """Context listing and deletion."""

    def __init__(self, store: FragmentStore) -> None:
        self._store = store

    async def list_contexts(self) -> list[ContextInfo]:
        return await run_in_threadpool(self._store.list_contexts)

    async def delete_context(self, name: str | None) -> str:
        """
        Delete a context by name.

        Raises:
            ValidationError: Missing name
            NotFoundError: Unknown context
        """
        if not name:
            raise ValidationError("Name is required", field="name")
        return await run_in_threadpool(self._store.delete, name)
