"""Language Courses API backend.

Enrollment management for a language-course school: students (alunos),
classes (turmas) and the enrollments (matriculas) linking them.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
