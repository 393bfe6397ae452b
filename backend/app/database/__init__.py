"""Database package."""

from app.database.mongodb import MongoDB, mongodb

__all__ = [
    "MongoDB",
    "mongodb",
]
