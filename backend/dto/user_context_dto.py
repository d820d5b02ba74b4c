import uuid
from dataclasses import dataclass


@dataclass
class UserContextDto:
    sub: str
    primary_email: str | None = None

    @property
    def user_id(self) -> uuid.UUID:
        return uuid.UUID(self.sub)
