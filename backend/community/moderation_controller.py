import uuid
from http import HTTPStatus
from fastapi import APIRouter
from backend.dto.moderation_dto import ModerationRequestDto, PostReportCreateDto
from backend.dto.user_context_dto import UserContextDto
from backend.common.fast_api_response_wrapper import api_response
from backend.common.api_endpoints import (
    COMMUNITY_MODERATE_POST_ENDPOINT,
    COMMUNITY_MODERATION_STATS_ENDPOINT,
    COMMUNITY_REPORT_POST_ENDPOINT,
    COMMUNITY_REPORTED_POSTS_ENDPOINT,
)
from backend.utils.permission_decorators import authenticate


class ModerationController:
    def __init__(self, moderation_service, database):
        """
        Initialize the ModerationController with its dependencies and register routes.

        Args:
            moderation_service (ModerationService): Reporting and moderation logic.
            database (Database): Database access object providing async session management.
        """
        self.router = APIRouter(tags=["moderation"])
        self.moderation_service = moderation_service
        self.database = database

        self.router.add_api_route(
            COMMUNITY_REPORT_POST_ENDPOINT,
            endpoint=authenticate()(self.report_post),
            methods=["POST"],
            response_model=None,
        )
        self.router.add_api_route(
            COMMUNITY_MODERATE_POST_ENDPOINT,
            endpoint=authenticate()(self.moderate_post),
            methods=["POST"],
            response_model=None,
        )

        self.router.add_api_route(
            COMMUNITY_REPORTED_POSTS_ENDPOINT,
            endpoint=authenticate()(self.get_reported_posts),
            methods=["GET"],
            response_model=None,
        )
        self.router.add_api_route(
            COMMUNITY_MODERATION_STATS_ENDPOINT,
            endpoint=authenticate()(self.get_moderation_stats),
            methods=["GET"],
            response_model=None,
        )

    async def report_post(
        self,
        current_user: UserContextDto,
        post_id: uuid.UUID,
        body: PostReportCreateDto,
    ):
        """
        Report a post for review by moderators.

        Returns:
            A 201 API response containing the pending report.
        """
        async with self.database.session() as session:
            report = await self.moderation_service.report_post(
                session, user_context=current_user, post_id=post_id, report=body
            )

        return api_response(
            message="Post reported successfully",
            data={"report": report},
            status_code=HTTPStatus.CREATED,
        )

    async def moderate_post(
        self,
        current_user: UserContextDto,
        post_id: uuid.UUID,
        body: ModerationRequestDto,
    ):
        """
        Approve, hide or delete a post. Requires the moderator role or above.

        Returns:
            API response containing the moderated post.
        """
        async with self.database.session() as session:
            post = await self.moderation_service.moderate_post(
                session, user_context=current_user, post_id=post_id, request=body
            )

        return api_response(
            message=f"Post {body.action.value} action completed successfully",
            data={"post": post},
        )

    async def get_reported_posts(self, current_user: UserContextDto):
        """
        List pending reports with their posts. Requires the moderator role or above.

        Returns:
            API response containing the pending reports, newest first.
        """
        async with self.database.session() as session:
            reports = await self.moderation_service.get_reported_posts(
                session, user_context=current_user
            )

        return api_response(
            message="Successfully fetched reported posts.", data={"reports": reports}
        )

    async def get_moderation_stats(self, current_user: UserContextDto):
        """
        Report and moderation totals. Requires the moderator role or above.
        """
        async with self.database.session() as session:
            stats = await self.moderation_service.get_moderation_stats(
                session, user_context=current_user
            )

        return api_response(message="Successfully fetched moderation stats.", data=stats)
