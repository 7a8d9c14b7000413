# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI dependencies for database sessions, callers and services.

Shared resources (Database, NotificationDispatcher, BlobStore, Settings)
are created by the application lifespan and read from app.state.
Services are built per request around the request's session.

Example:
    @router.get("/courses")
    async def list_courses(
        current_user: CurrentUser,
        service: CourseServiceDep,
    ) -> list[CourseResponse]:
        ...
"""

import logging
from typing import Annotated, AsyncGenerator

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config.settings import Settings
from src.domains.announcement import AnnouncementService
from src.domains.assignment import AssignmentService
from src.domains.authorization import AuthorizationService
from src.domains.course import CourseService
from src.domains.enrollment import EnrollmentService
from src.domains.material import MaterialService
from src.domains.user import UserNotFoundError, UserService
from src.infrastructure.database import Database
from src.infrastructure.database.models import User
from src.infrastructure.notifications import NotificationDispatcher
from src.infrastructure.storage import BlobStore

logger = logging.getLogger(__name__)


def get_settings_state(request: Request) -> Settings:
    """Get the settings the application was created with."""
    return request.app.state.settings


def get_notifications(request: Request) -> NotificationDispatcher:
    """Get the application's notification dispatcher."""
    return request.app.state.notifications


def get_blob_store(request: Request) -> BlobStore:
    """Get the application's blob store."""
    return request.app.state.blobs


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Get a database session for the request.

    The session commits when the handler succeeds and rolls back when it
    raises.

    Yields:
        AsyncSession for database operations.
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session


DB = Annotated[AsyncSession, Depends(get_db)]
AppSettings = Annotated[Settings, Depends(get_settings_state)]
Notifications = Annotated[NotificationDispatcher, Depends(get_notifications)]
Blobs = Annotated[BlobStore, Depends(get_blob_store)]


async def get_current_user(
    db: DB,
    x_telegram_id: Annotated[str | None, Header()] = None,
) -> User:
    """Resolve the caller from the X-Telegram-Id header.

    Raises:
        HTTPException: 401 if the header is missing or the identity is
            unknown.
    """
    if not x_telegram_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-Telegram-Id header is required",
        )

    try:
        return await UserService(db).get_by_identity(x_telegram_id)
    except UserNotFoundError:
        logger.info("Unknown caller identity: %s", x_telegram_id)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unknown user, register first",
        )


CurrentUser = Annotated[User, Depends(get_current_user)]


def get_user_service(db: DB) -> UserService:
    return UserService(db)


def get_authorization_service(db: DB) -> AuthorizationService:
    return AuthorizationService(db)


def get_course_service(db: DB, settings: AppSettings) -> CourseService:
    return CourseService(db, settings.course)


def get_enrollment_service(
    db: DB,
    courses: Annotated[CourseService, Depends(get_course_service)],
    authorization: Annotated[AuthorizationService, Depends(get_authorization_service)],
) -> EnrollmentService:
    return EnrollmentService(db, courses=courses, authorization=authorization)


def get_assignment_service(
    db: DB,
    settings: AppSettings,
    notifications: Notifications,
    blobs: Blobs,
    courses: Annotated[CourseService, Depends(get_course_service)],
    authorization: Annotated[AuthorizationService, Depends(get_authorization_service)],
) -> AssignmentService:
    return AssignmentService(
        db,
        notifications=notifications,
        blobs=blobs,
        settings=settings.course,
        courses=courses,
        authorization=authorization,
    )


def get_announcement_service(
    db: DB,
    notifications: Notifications,
    courses: Annotated[CourseService, Depends(get_course_service)],
    authorization: Annotated[AuthorizationService, Depends(get_authorization_service)],
) -> AnnouncementService:
    return AnnouncementService(
        db,
        notifications=notifications,
        courses=courses,
        authorization=authorization,
    )


def get_material_service(
    db: DB,
    blobs: Blobs,
    courses: Annotated[CourseService, Depends(get_course_service)],
    authorization: Annotated[AuthorizationService, Depends(get_authorization_service)],
) -> MaterialService:
    return MaterialService(db, blobs, courses=courses, authorization=authorization)


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
AuthorizationServiceDep = Annotated[AuthorizationService, Depends(get_authorization_service)]
CourseServiceDep = Annotated[CourseService, Depends(get_course_service)]
EnrollmentServiceDep = Annotated[EnrollmentService, Depends(get_enrollment_service)]
AssignmentServiceDep = Annotated[AssignmentService, Depends(get_assignment_service)]
AnnouncementServiceDep = Annotated[AnnouncementService, Depends(get_announcement_service)]
MaterialServiceDep = Annotated[MaterialService, Depends(get_material_service)]
