"""ORM Models — SQLAlchemy declarative models for accounts, lessons and reports.

Invariants:
    - All models inherit from Base (db/base.py)
    - Likes/favorites are rows keyed by (lesson_id, account_email): set semantics by primary key

Design Decisions:
    - One file per aggregate for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs (ADR: standard SQLAlchemy pattern)
"""

from lessons_api.models.account import Account  # noqa: F401
from lessons_api.models.lesson import Lesson, LessonFavorite, LessonLike  # noqa: F401
from lessons_api.models.report import Report  # noqa: F401
