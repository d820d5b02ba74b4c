import uuid
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from backend.entity.audit_logs_entity import AuditLogsEntity


class AuditLogService:
    """
    Writes audit entries for privileged and state-changing actions.

    Audit writes are best-effort: they run inside a SAVEPOINT so that a failed
    insert is rolled back on its own, is logged, and never fails the operation
    that triggered it.
    """

    def __init__(self, logger, audit_logs_repository):
        """
        Args:
            logger: The logger instance for logging messages.
            audit_logs_repository (AuditLogsRepository): Repository for audit entries.
        """
        self.logger = logger
        self.audit_logs_repository = audit_logs_repository

    async def record(
        self,
        session: AsyncSession,
        user_id: uuid.UUID,
        action: str,
        table_name: str,
        record_id: uuid.UUID,
        new_data: dict | None = None,
    ) -> bool:
        """
        Attempt to write one audit entry.

        Args:
            session (AsyncSession): Active database session of the parent operation.
            user_id (uuid.UUID): The acting user.
            action (str): Action name, e.g. "SESSION_START".
            table_name (str): Table of the affected record.
            record_id (uuid.UUID): ID of the affected record.
            new_data (dict | None): JSON-serializable snapshot of the change.

        Returns:
            bool: True if the entry was written, False if the write failed.
        """
        entry = AuditLogsEntity(
            user_id=user_id,
            action=action,
            table_name=table_name,
            record_id=record_id,
            new_data=new_data,
        )
        try:
            async with session.begin_nested():
                await self.audit_logs_repository.insert_audit_log(session, entry)
        except SQLAlchemyError as e:
            self.logger.warning(
                "[AuditLogService] failed to write audit entry %s for %s %s: %s",
                action,
                table_name,
                record_id,
                str(e),
            )
            return False

        return True
