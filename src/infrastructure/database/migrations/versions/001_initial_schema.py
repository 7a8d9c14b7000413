# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Initial schema.

Revision ID: 001_initial
Revises: None
Create Date: 2025-06-02

Creates users, courses, course teachers, enrollments, assignments,
submissions, announcements, comments and materials.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id() -> sa.Column:
    return sa.Column("id", sa.String(36), primary_key=True)


def upgrade() -> None:
    """Create all tables."""
    # ==========================================================================
    # 1. users
    # ==========================================================================
    op.create_table(
        "users",
        _id(),
        sa.Column("external_identity", sa.String(64), nullable=False),
        sa.Column("username", sa.String(64), nullable=True),
        sa.Column("first_name", sa.String(100), nullable=True),
        sa.Column("last_name", sa.String(100), nullable=True),
        sa.Column("role", sa.String(20), nullable=False, server_default="student"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("external_identity", name="uq_users_external_identity"),
    )

    # ==========================================================================
    # 2. courses
    # ==========================================================================
    op.create_table(
        "courses",
        _id(),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("access_code", sa.String(32), nullable=False),
        sa.Column(
            "teacher_id",
            sa.String(36),
            sa.ForeignKey("users.id", name="fk_courses_teacher_id_users"),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("access_code", name="uq_courses_access_code"),
    )
    op.create_index("ix_courses_teacher_id", "courses", ["teacher_id"])

    # ==========================================================================
    # 3. course_teachers and enrollments
    # ==========================================================================
    for table, timestamp in (("course_teachers", "added_at"), ("enrollments", "enrolled_at")):
        op.create_table(
            table,
            _id(),
            sa.Column(
                "course_id",
                sa.String(36),
                sa.ForeignKey("courses.id", name=f"fk_{table}_course_id_courses", ondelete="CASCADE"),
                nullable=False,
            ),
            sa.Column(
                "user_id",
                sa.String(36),
                sa.ForeignKey("users.id", name=f"fk_{table}_user_id_users", ondelete="CASCADE"),
                nullable=False,
            ),
            sa.Column(timestamp, sa.DateTime(timezone=True), nullable=False),
            sa.UniqueConstraint("course_id", "user_id", name=f"uq_{table}_course_user"),
        )
        op.create_index(f"ix_{table}_course_id", table, ["course_id"])
        op.create_index(f"ix_{table}_user_id", table, ["user_id"])

    # ==========================================================================
    # 4. assignments and submissions
    # ==========================================================================
    op.create_table(
        "assignments",
        _id(),
        sa.Column(
            "course_id",
            sa.String(36),
            sa.ForeignKey("courses.id", name="fk_assignments_course_id_courses", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("max_points", sa.Integer, nullable=False, server_default="100"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("max_points > 0", name="ck_assignments_max_points_positive"),
    )
    op.create_index("ix_assignments_course_id", "assignments", ["course_id"])

    op.create_table(
        "submissions",
        _id(),
        sa.Column(
            "assignment_id",
            sa.String(36),
            sa.ForeignKey(
                "assignments.id",
                name="fk_submissions_assignment_id_assignments",
                ondelete="CASCADE",
            ),
            nullable=False,
        ),
        sa.Column(
            "user_id",
            sa.String(36),
            sa.ForeignKey("users.id", name="fk_submissions_user_id_users", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("content", sa.Text, nullable=True),
        sa.Column("file_reference", sa.String(255), nullable=True),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("grade", sa.Integer, nullable=True),
        sa.Column("feedback", sa.Text, nullable=True),
        sa.Column("graded_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint("assignment_id", "user_id", name="uq_submissions_assignment_user"),
    )
    op.create_index("ix_submissions_assignment_id", "submissions", ["assignment_id"])
    op.create_index("ix_submissions_user_id", "submissions", ["user_id"])

    # ==========================================================================
    # 5. announcements and comments
    # ==========================================================================
    op.create_table(
        "announcements",
        _id(),
        sa.Column(
            "course_id",
            sa.String(36),
            sa.ForeignKey("courses.id", name="fk_announcements_course_id_courses", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_announcements_course_id", "announcements", ["course_id"])

    op.create_table(
        "comments",
        _id(),
        sa.Column(
            "announcement_id",
            sa.String(36),
            sa.ForeignKey(
                "announcements.id",
                name="fk_comments_announcement_id_announcements",
                ondelete="CASCADE",
            ),
            nullable=False,
        ),
        sa.Column(
            "user_id",
            sa.String(36),
            sa.ForeignKey("users.id", name="fk_comments_user_id_users", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_comments_announcement_id", "comments", ["announcement_id"])
    op.create_index("ix_comments_user_id", "comments", ["user_id"])

    # ==========================================================================
    # 6. materials
    # ==========================================================================
    op.create_table(
        "materials",
        _id(),
        sa.Column(
            "course_id",
            sa.String(36),
            sa.ForeignKey("courses.id", name="fk_materials_course_id_courses", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("file_reference", sa.String(255), nullable=False),
        sa.Column("file_type", sa.String(20), nullable=True),
        sa.Column("uploaded_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_materials_course_id", "materials", ["course_id"])


def downgrade() -> None:
    """Drop all tables."""
    for table in (
        "materials",
        "comments",
        "announcements",
        "submissions",
        "assignments",
        "enrollments",
        "course_teachers",
        "courses",
        "users",
    ):
        op.drop_table(table)
