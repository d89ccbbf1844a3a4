"""
Repositories Package

One repository per entity. Each conforms to the Repository protocol in
base.py by delegating to a ModelQuery; none of them inherit from a shared
base class.
"""

from bible_api.repositories.base import ModelQuery, Repository
from bible_api.repositories.books import BookRepository
from bible_api.repositories.chapters import ChapterRepository
from bible_api.repositories.verses import VerseRepository

__all__ = [
    "BookRepository",
    "ChapterRepository",
    "ModelQuery",
    "Repository",
    "VerseRepository",
]
