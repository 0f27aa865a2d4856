"""Database models and session management for Pet Wiki."""

from pet_wiki.db.models import BlogPost, BlogSearchResult, BreedRecord, Category, Pet
from pet_wiki.db.session import get_engine, get_session, init_db
from pet_wiki.db.repo import Repository

__all__ = [
    # Models
    "Category",
    "Pet",
    "BlogPost",
    "BreedRecord",
    "BlogSearchResult",
    # Session
    "get_engine",
    "get_session",
    "init_db",
    # Repository
    "Repository",
]
