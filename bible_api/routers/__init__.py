"""
API Routers Package

Router Structure:
- books.py: /api/v1/public/bible/books/*
- chapters.py: /api/v1/public/bible/books/{bookOrder}/chapters/*
- verses.py: /api/v1/public/bible/books/{bookOrder}/chapters/{chapterNumber}/verses/*

Each router is imported and registered in main.py.
"""

from bible_api.routers.books import router as books_router
from bible_api.routers.chapters import router as chapters_router
from bible_api.routers.verses import router as verses_router

__all__ = [
    "books_router",
    "chapters_router",
    "verses_router",
]
