"""Enums for model fields."""

from enum import Enum


class Role(str, Enum):
    """Roles a user can hold."""

    USER = "user"
    ADMIN = "admin"

    def satisfies(self, required: "Role") -> bool:
        """Check if this role grants everything the required role grants."""
        if self == Role.ADMIN:
            return True
        return self == required
