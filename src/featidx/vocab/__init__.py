"""Per-column vocabularies and their loaders."""

from __future__ import annotations

from .loader import FileVocabularyLoader, InMemoryVocabularyLoader, VocabularyLoader
from .vocabulary import Vocabulary

__all__ = [
    "Vocabulary",
    "VocabularyLoader",
    "FileVocabularyLoader",
    "InMemoryVocabularyLoader",
]
