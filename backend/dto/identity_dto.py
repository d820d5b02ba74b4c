import uuid
from backend.dto.base_dto import BaseDto
from backend.common.user_role import UserRole


class IdentityDto(BaseDto):
    id: uuid.UUID
    email: str | None = None
    full_name: str | None = None
    role: UserRole
