from sqlalchemy.ext.asyncio import AsyncSession
from backend.common.user_role import UserRole
from backend.dto.identity_dto import IdentityDto
from backend.dto.user_context_dto import UserContextDto


class IdentityService:
    def __init__(self, logger, profiles_repository):
        self.logger = logger
        self.profiles_repository = profiles_repository

    async def get_me(
        self, session: AsyncSession, user_context: UserContextDto
    ) -> IdentityDto:
        """
        Describe the authenticated caller.

        The role comes from the caller's profile row and defaults to viewer when
        the user has no profile yet.

        Args:
            session (AsyncSession): Active database async session.
            user_context (UserContextDto): The authenticated caller.

        Returns:
            IdentityDto: The caller's id, email, name and role.
        """
        profile = await self.profiles_repository.get_by_id(
            session, user_context.user_id
        )
        if not profile:
            self.logger.debug(
                "[IdentityService] no profile for %s, defaulting to viewer",
                user_context.sub,
            )
            return IdentityDto(
                id=user_context.user_id,
                email=user_context.primary_email,
                role=UserRole.VIEWER,
            )

        return IdentityDto(
            id=profile.id,
            email=profile.email or user_context.primary_email,
            full_name=profile.full_name,
            role=UserRole.from_value(profile.role),
        )
