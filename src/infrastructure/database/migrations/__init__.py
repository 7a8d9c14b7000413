# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database migrations package.

Alembic environment and revisions for the ChatClassroom schema. Run with
``alembic upgrade head`` from the repository root; the target database is
taken from DB_URL.
"""
