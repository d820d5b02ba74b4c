from enum import Enum


class UserRole(str, Enum):
    """
    Platform roles stored on the profile row, in increasing order of privilege.

    Declaration order is the privilege order.
    """

    VIEWER = "viewer"
    MODERATOR = "moderator"
    ADMIN = "admin"
    SUPERADMIN = "superadmin"

    @property
    def rank(self) -> int:
        return list(UserRole).index(self)

    def has_at_least(self, role: "UserRole") -> bool:
        """Return True if this role is the given role or a more privileged one."""
        return self.rank >= role.rank

    @classmethod
    def from_value(cls, value: str | None) -> "UserRole":
        """Parse a stored role string, treating unknown or missing values as VIEWER."""
        try:
            return cls(value.lower())
        except (AttributeError, ValueError):
            return cls.VIEWER
