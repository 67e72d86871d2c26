"""
Kernel Data Models

SQLAlchemy models for the User aggregate and its owned phones.
"""

from src.kernel.models.base import Base, generate_uuid
from src.kernel.models.user import User, Phone

__all__ = [
    "Base",
    "generate_uuid",
    "User",
    "Phone",
]
