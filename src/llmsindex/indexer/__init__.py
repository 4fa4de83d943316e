"""
Indexer module: walk the repository and render the llms.txt documents.
"""

from .generator import GenerationResult, generate_indexes
from .render import (
    generate_full_index,
    generate_short_index,
    probe_exists,
)
from .tree import DEFAULT_SKIP_DIRS, FileDescriptor, walk

__all__ = [
    "DEFAULT_SKIP_DIRS",
    "FileDescriptor",
    "GenerationResult",
    "generate_full_index",
    "generate_indexes",
    "generate_short_index",
    "probe_exists",
    "walk",
]
