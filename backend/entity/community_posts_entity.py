import uuid
from datetime import datetime
from sqlalchemy import DateTime, Enum as SAEnum, Integer, String, func
from sqlalchemy.dialects.postgresql import ARRAY, UUID
from sqlalchemy.orm import Mapped, mapped_column
from backend.common.base import Base
from backend.common.community_enums import (
    MODERATION_ACTION_TO_STATUS,
    ModerationAction,
    PostStatus,
)


class CommunityPostsEntity(Base):
    __tablename__ = "community_posts"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )

    user_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), index=True)
    title: Mapped[str] = mapped_column(String)
    content: Mapped[str | None] = mapped_column(String)
    post_type: Mapped[str | None] = mapped_column(String)

    # text[] array
    tags: Mapped[list[str] | None] = mapped_column(ARRAY(String))

    likes_count: Mapped[int] = mapped_column(Integer, default=0)
    comments_count: Mapped[int] = mapped_column(Integer, default=0)

    status: Mapped[PostStatus] = mapped_column(
        SAEnum(
            PostStatus,
            native_enum=False,
            values_callable=lambda obj: [e.value for e in obj],
        ),
        default=PostStatus.PUBLISHED,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=func.now(), index=True
    )

    moderated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    moderated_by: Mapped[uuid.UUID | None] = mapped_column(UUID(as_uuid=True))
    moderation_reason: Mapped[str | None] = mapped_column(String)
    moderation_action: Mapped[ModerationAction | None] = mapped_column(
        # Stored as the resulting status ("approved", "hidden", "deleted").
        SAEnum(
            ModerationAction,
            native_enum=False,
            values_callable=lambda obj: [
                MODERATION_ACTION_TO_STATUS[e].value for e in obj
            ],
        )
    )
