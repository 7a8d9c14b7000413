# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Domain services layer for ChatClassroom.

This package contains domain services that encapsulate business logic.
Each service receives its collaborators (database session, authorization,
notification dispatcher, blob store) through its constructor.

Domains:
    user: Identity store (external chat identity to user record).
    course: Course registry, access codes, co-teachers.
    enrollment: Join-by-code protocol and course rosters.
    assignment: Assignments, submissions and grading.
    announcement: Announcements and their comments.
    material: Course materials backed by the blob store.
    authorization: Course-scoped teacher and membership checks.
"""
