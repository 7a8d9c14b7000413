"""ChatClassroom Backend.

Learning-management backend for a chat-based client: courses, access-code
enrollment, assignments and grading, announcements with comments, and
course materials.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
