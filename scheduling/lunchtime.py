"""Auflösung der Mittagszeit eines Schülers an einem Wochentag.

Vorrangregeln (erster Treffer gewinnt):
  1. Keine Zuordnung für (Schüler, Tag)          → unbestimmt (NO_ASSIGNMENT)
  2. Jahrgang wird klassenweise zugeordnet:
       a. keine Lehrkraft gesetzt                 → unbestimmt (NO_TEACHER)
       b. Lehrkraft hat keine Zeit an dem Tag     → unbestimmt (NO_TEACHER_TIME)
          sonst: erste (früheste) Lehrerzeit
  3. Sonst: Jahrgangszeit des Tages
       keine Zeit                                 → unbestimmt (NO_GRADE_TIME)
          sonst: erste (früheste) Jahrgangszeit

Die schulweiten Zeiten sind KEIN Rückfallwert. Sie werden ausschließlich in
candidate_times() gelesen, das die Auswahlliste für Administratoren liefert.
Unbestimmte Zuordnungen sollen sichtbar werden statt still einen Default zu
bekommen.
"""

import logging
from enum import Enum
from typing import Iterable, Optional

from pydantic import BaseModel

from models.grade import GradeLevel, SCHOOL_DAYS, Weekday
from models.lunch_config import SchoolYearLunchConfig

logger = logging.getLogger(__name__)


class UndeterminedReason(str, Enum):
    NO_ASSIGNMENT = "no_assignment"
    NO_TEACHER = "no_teacher"
    NO_TEACHER_TIME = "no_teacher_time"
    NO_GRADE_TIME = "no_grade_time"


class ResolvedLunchTime(BaseModel):
    """Aufgelöste Mittagszeit; time=None bedeutet UNBESTIMMT."""

    student_id: int
    day: Weekday
    time: Optional[str] = None
    reason: Optional[UndeterminedReason] = None   # nur bei unbestimmt
    grade: Optional[GradeLevel] = None
    teacher_id: Optional[int] = None

    @property
    def is_undetermined(self) -> bool:
        return self.time is None


def resolve_teacher_time(
    config: SchoolYearLunchConfig, teacher_id: int, day: Weekday
) -> Optional[str]:
    """Erste veröffentlichte Zeit einer Lehrkraft an einem Tag oder None."""
    times = config.teacher_times_for(teacher_id, day)
    return times[0] if times else None


def resolve_grade_time(
    config: SchoolYearLunchConfig, grade: GradeLevel, day: Weekday
) -> Optional[str]:
    """Erste veröffentlichte Zeit eines Jahrgangs an einem Tag oder None."""
    times = config.grade_times_for(grade, day)
    return times[0] if times else None


def resolve_student_time(
    config: SchoolYearLunchConfig, student_id: int, day: Weekday
) -> ResolvedLunchTime:
    """Löst die Mittagszeit eines Schülers an einem Wochentag auf."""
    day = Weekday(day)
    assignment = config.assignment_for(student_id, day)
    if assignment is None:
        return ResolvedLunchTime(
            student_id=student_id, day=day,
            reason=UndeterminedReason.NO_ASSIGNMENT,
        )

    result = ResolvedLunchTime(
        student_id=student_id, day=day,
        grade=assignment.grade, teacher_id=assignment.teacher_id,
    )

    if config.is_classroom_governed(assignment.grade):
        if assignment.teacher_id is None:
            return result.model_copy(update={"reason": UndeterminedReason.NO_TEACHER})
        t = resolve_teacher_time(config, assignment.teacher_id, day)
        if t is None:
            return result.model_copy(update={"reason": UndeterminedReason.NO_TEACHER_TIME})
        return result.model_copy(update={"time": t})

    t = resolve_grade_time(config, assignment.grade, day)
    if t is None:
        return result.model_copy(update={"reason": UndeterminedReason.NO_GRADE_TIME})
    return result.model_copy(update={"time": t})


def student_week(
    config: SchoolYearLunchConfig, student_id: int
) -> list[ResolvedLunchTime]:
    """Aufgelöste Zeiten eines Schülers für Montag bis Freitag."""
    return [resolve_student_time(config, student_id, day) for day in SCHOOL_DAYS]


def find_undetermined(
    config: SchoolYearLunchConfig, student_ids: Iterable[int]
) -> set[int]:
    """Schüler, deren Zeit an mindestens einem Schultag unbestimmt ist."""
    flagged: set[int] = set()
    for student_id in student_ids:
        for day in SCHOOL_DAYS:
            resolved = resolve_student_time(config, student_id, day)
            if resolved.is_undetermined:
                logger.debug(
                    f"Schüler {student_id}: {day.name} unbestimmt ({resolved.reason.value})"
                )
                flagged.add(student_id)
                break
    return flagged


def candidate_times(
    config: SchoolYearLunchConfig,
    day: Weekday,
    teacher_id: Optional[int] = None,
    grade: Optional[GradeLevel] = None,
) -> list[str]:
    """Auswahlliste für die Veröffentlichung von Zeiten.

    Vereinigung aus schulweitem Pool und den bereits für die Lehrkraft bzw.
    den Jahrgang veröffentlichten Zeiten, sortiert.
    """
    pool = set(config.school_times_for(day))
    if teacher_id is not None:
        pool.update(config.teacher_times_for(teacher_id, day))
    if grade is not None:
        pool.update(config.grade_times_for(grade, day))
    return sorted(pool)
