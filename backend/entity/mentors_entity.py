import uuid
from sqlalchemy import Float, String
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column
from backend.common.base import Base
from backend.common.constants import DEFAULT_MENTOR_TIMEZONE


class MentorsEntity(Base):
    __tablename__ = "mentors"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )

    name: Mapped[str] = mapped_column(String)
    hourly_rate: Mapped[float] = mapped_column(Float)

    # {"monday": ["09:00", "10:00"], ...}
    availability: Mapped[dict | None] = mapped_column(JSONB)

    timezone: Mapped[str] = mapped_column(String, default=DEFAULT_MENTOR_TIMEZONE)
