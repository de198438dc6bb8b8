from .object_manager import ClassMetadata, ObjectManager, SQLAlchemyObjectManager

__all__ = [
    "ClassMetadata",
    "ObjectManager",
    "SQLAlchemyObjectManager",
]
