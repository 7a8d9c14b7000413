# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Timestamp helpers.

Columns are declared ``DateTime(timezone=True)``, but SQLite returns naive
values on read. Anything loaded from storage is passed through ensure_utc()
before it is compared with utc_now() or placed in a response.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current instant as an aware UTC datetime. Used as column default."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime | None) -> datetime | None:
    """Attach or convert to UTC.

    Naive values are taken to already be UTC. None passes through so that
    optional columns such as ``graded_at`` can be mapped without a branch.
    """
    if value is None:
        return None
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc)
    return value.replace(tzinfo=timezone.utc)
