"""
Repository layer initialization module.

Usage:
    from orm_validators.repositories import BaseRepository, ObjectRepository
"""

from .base_repository import BaseRepository, ObjectRepository

__all__ = [
    "BaseRepository",
    "ObjectRepository",
]
