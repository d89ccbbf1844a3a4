"""
SQLAlchemy Models Package

Model Relationships:
- Book -> Chapter: One-to-Many (a book owns its chapters)
- Chapter -> Verse: One-to-Many (a chapter owns its verses)

Import all models here to:
1. Make them available as: from bible_api.models import Book, Chapter, Verse
2. Ensure Alembic discovers them for migrations
"""

from bible_api.models.book import Book, Testament
from bible_api.models.chapter import Chapter
from bible_api.models.verse import Verse

__all__ = [
    "Book",
    "Chapter",
    "Testament",
    "Verse",
]
