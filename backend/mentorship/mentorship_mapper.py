from backend.dto.session_dto import SessionDto
from backend.entity.sessions_entity import SessionsEntity


class MentorshipMapper:
    """
    Mapper for converting mentorship session entities to DTOs.
    """

    def map_to_session_dto(self, entity: SessionsEntity) -> SessionDto:
        """Maps a SessionsEntity to a SessionDto."""
        return SessionDto(
            id=entity.id,
            mentor_id=entity.mentor_id,
            learner_id=entity.learner_id,
            mentor_name=entity.mentor_name,
            learner_name=entity.learner_name,
            date=entity.date,
            duration_minutes=entity.duration_minutes,
            topic=entity.topic,
            price=entity.price,
            status=entity.status,
            feedback=entity.feedback,
            rating=entity.rating,
            notes=entity.notes,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
