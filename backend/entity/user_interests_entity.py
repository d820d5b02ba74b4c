import uuid
from sqlalchemy import String
from sqlalchemy.dialects.postgresql import ARRAY, UUID
from sqlalchemy.orm import Mapped, mapped_column
from backend.common.base import Base


class UserInterestsEntity(Base):
    __tablename__ = "user_interests"

    user_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True)

    tags: Mapped[list[str] | None] = mapped_column(ARRAY(String))
    categories: Mapped[list[str] | None] = mapped_column(ARRAY(String))
