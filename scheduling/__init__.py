"""Scheduling-Modul: Bestellfenster und Mittagszeiten-Auflösung."""

from .order_window import resolve_instant, resolve_window, schedule_windows, week_start
from .lunchtime import (
    ResolvedLunchTime,
    UndeterminedReason,
    candidate_times,
    find_undetermined,
    resolve_grade_time,
    resolve_student_time,
    resolve_teacher_time,
    student_week,
)

__all__ = [
    "resolve_instant",
    "resolve_window",
    "schedule_windows",
    "week_start",
    "ResolvedLunchTime",
    "UndeterminedReason",
    "candidate_times",
    "find_undetermined",
    "resolve_grade_time",
    "resolve_student_time",
    "resolve_teacher_time",
    "student_week",
]
