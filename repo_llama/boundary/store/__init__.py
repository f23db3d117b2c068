"""
File-backed fragment store.

Exports: FragmentStore, sanitize_context_name
"""

from .fragment_store import FragmentStore, sanitize_context_name

__all__ = ["FragmentStore", "sanitize_context_name"]
