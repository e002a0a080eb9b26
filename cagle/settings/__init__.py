"""
Settings Store - load, merge and persist Claude settings documents.

Provides:
- load_local_list: Allow-list of the project-local settings file
- load_global_document: The user-global settings document ({} if absent)
- extract_list: ``permissions.allow`` strings of any document
- merge_list: Copy of a document with ``permissions.allow`` replaced
- persist: Pretty-printed write, creating parent directories
"""

from .store import (
    read_document,
    extract_list,
    load_local_list,
    load_global_document,
    merge_list,
    persist,
)

__all__ = [
    "read_document",
    "extract_list",
    "load_local_list",
    "load_global_document",
    "merge_list",
    "persist",
]
