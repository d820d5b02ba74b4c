import uuid
from datetime import datetime
from sqlalchemy import DateTime, ForeignKey, String, func
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column
from backend.common.base import Base


class UserEngagementEntity(Base):
    __tablename__ = "user_engagement"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )

    user_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), index=True)
    post_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("community_posts.id"))
    action: Mapped[str] = mapped_column(String)

    # "metadata" is reserved on declarative classes.
    event_metadata: Mapped[dict | None] = mapped_column("metadata", JSONB)

    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=func.now(), index=True
    )
