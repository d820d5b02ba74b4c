from backend.entity.audit_logs_entity import AuditLogsEntity
from sqlalchemy.ext.asyncio import AsyncSession


class AuditLogsRepository:
    """
    Repository for handling database operations related to AuditLogsEntity.
    """

    async def insert_audit_log(
        self, session: AsyncSession, entity: AuditLogsEntity
    ) -> AuditLogsEntity:
        """
        Insert an audit log entry.

        Args:
            session (AsyncSession): The active async database session.
            entity (AuditLogsEntity): The audit entry.

        Returns:
            AuditLogsEntity: The flushed entity.
        """
        session.add(entity)
        await session.flush()

        return entity
