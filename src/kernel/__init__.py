"""
Kernel Layer

- Identity Core (credentials, session tokens, registration and login)
- Data models (User aggregate with owned phones)

Invariants:
- Exactly one user per email, enforced by the storage unique constraint
- Phones exist only while attached to their user
- Only the password hash is ever stored
"""

from src.kernel.models import User, Phone

__all__ = [
    "User",
    "Phone",
]
