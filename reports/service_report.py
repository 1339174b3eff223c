"""Ausgabebericht: bestellte Mahlzeiten eines Ausgabetags in Gruppen.

Reihenfolge der Gruppen:
  1. Klassen (eine Gruppe pro Klassenlehrkraft, sortiert nach Anzeigename)
  2. Jahrgänge (nur nicht klassenweise zugeordnete, in Jahrgangsreihenfolge)
  3. "Other": Schüler ohne verwertbare Zuordnung
  4. Personal: Lehr-/Personalkräfte, die nicht schon eine Klassengruppe führen

Jeder Schüler erscheint in genau einer Gruppe. Die Menge der bereits
vergebenen Schüler (claimed) wird explizit durch alle Schritte gereicht, damit
auch fehlerhafte Daten (ein Schüler bei zwei Lehrkräften) nicht doppelt
gezählt werden.
"""

import logging
from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from models.grade import GradeLevel, Weekday
from models.lunch_config import SchoolYearLunchConfig
from models.order import Meal, Order, meals_on
from models.roster import Roster, User
from scheduling.lunchtime import resolve_grade_time, resolve_teacher_time

logger = logging.getLogger(__name__)

OTHER_TITLE = "Students With Unassigned Lunch Times"
STAFF_TITLE = "Staff Lunches"


class GroupKind(str, Enum):
    CLASSROOM = "classroom"
    GRADE = "grade"
    OTHER = "other"
    STAFF = "staff"


class Participant(BaseModel):
    """Ein Esser mit allen seinen Mahlzeiten des Tages."""

    eater_id: int
    is_staff: bool = False
    display_name: str
    meals: list[Meal] = []

    @property
    def sort_key(self) -> tuple[str, int]:
        return (self.display_name.casefold(), self.eater_id)


class ReportGroup(BaseModel):
    """Eine Gruppe des Ausgabeberichts (Klasse, Jahrgang, Other, Personal)."""

    kind: GroupKind
    title: str
    time: Optional[str] = None
    participants: list[Participant] = []
    teacher_id: Optional[int] = None      # nur bei CLASSROOM
    grade: Optional[GradeLevel] = None    # nur bei GRADE

    @property
    def meal_count(self) -> int:
        return sum(len(p.meals) for p in self.participants)


# ─── Hilfsfunktionen ──────────────────────────────────────────────────────────

def _group_meals(meals: list[Meal]) -> tuple[dict[int, list[Meal]], dict[int, list[Meal]]]:
    """Mahlzeiten nach Esser gruppieren (Reihenfolge des ersten Auftretens)."""
    by_student: dict[int, list[Meal]] = {}
    by_staff: dict[int, list[Meal]] = {}
    for meal in meals:
        if meal.student_id is not None:
            by_student.setdefault(meal.student_id, []).append(meal)
        elif meal.staff_member_id is not None:
            by_staff.setdefault(meal.staff_member_id, []).append(meal)
        else:
            logger.debug(f"Mahlzeit {meal.id} ohne Esser (Spende) – keiner Gruppe zugeordnet")
    return by_student, by_staff


def _student_participants(
    student_ids, by_student: dict[int, list[Meal]], roster: Roster
) -> list[Participant]:
    participants = [
        Participant(
            eater_id=sid,
            display_name=roster.student_name(sid),
            meals=by_student[sid],
        )
        for sid in student_ids
    ]
    return sorted(participants, key=lambda p: p.sort_key)


def _classroom_group(
    teacher: User,
    day: Weekday,
    config: SchoolYearLunchConfig,
    roster: Roster,
    by_student: dict[int, list[Meal]],
    by_staff: dict[int, list[Meal]],
    claimed: set[int],
) -> Optional[ReportGroup]:
    """Klassengruppe einer Lehrkraft; vergebene Schüler landen in claimed."""
    participants: list[Participant] = []
    if teacher.id in by_staff:
        participants.append(Participant(
            eater_id=teacher.id,
            is_staff=True,
            display_name=teacher.display_name,
            meals=by_staff[teacher.id],
        ))

    students = [
        sid for sid in by_student
        if sid not in claimed
        and any(a.teacher_id == teacher.id for a in config.assignments_for(sid, day))
    ]
    participants.extend(_student_participants(students, by_student, roster))
    claimed.update(students)

    if not participants:
        return None
    return ReportGroup(
        kind=GroupKind.CLASSROOM,
        title=teacher.display_name,
        time=resolve_teacher_time(config, teacher.id, day),
        participants=participants,
        teacher_id=teacher.id,
    )


# ─── Berichte ─────────────────────────────────────────────────────────────────

def build_service_report(
    service_date: date,
    roster: Roster,
    config: SchoolYearLunchConfig,
    orders: list[Order],
    teacher_directory: Optional[dict[int, User]] = None,
    other_title: str = OTHER_TITLE,
    staff_title: str = STAFF_TITLE,
) -> list[ReportGroup]:
    """Gruppierter Ausgabebericht für einen Tag; leere Liste ohne Mahlzeiten."""
    meals = meals_on(orders, service_date)
    if not meals:
        return []

    day = Weekday.of(service_date)
    directory = teacher_directory if teacher_directory is not None else roster.teacher_directory()
    by_student, by_staff = _group_meals(meals)

    # Kandidaten: Lehrkräfte aus Zuordnungen + Lehrkräfte mit eigener Mahlzeit
    candidate_ids: set[int] = set()
    for sid in by_student:
        for a in config.assignments_for(sid, day):
            if a.teacher_id is not None:
                candidate_ids.add(a.teacher_id)
    candidate_ids.update(uid for uid in by_staff if uid in directory)

    teachers: list[User] = []
    for tid in candidate_ids:
        if tid in directory:
            teachers.append(directory[tid])
        else:
            logger.debug(f"Lehrkraft {tid} nicht im Verzeichnis – keine Klassengruppe")
    teachers.sort(key=lambda t: (t.display_name.casefold(), t.id))

    groups: list[ReportGroup] = []
    claimed: set[int] = set()
    owners: set[int] = set()

    for teacher in teachers:
        group = _classroom_group(teacher, day, config, roster, by_student, by_staff, claimed)
        if group is not None:
            groups.append(group)
            owners.add(teacher.id)

    # Jahrgänge (erste Zuordnung zählt)
    by_grade: dict[GradeLevel, list[int]] = {}
    for sid in by_student:
        if sid in claimed:
            continue
        assignment = config.assignment_for(sid, day)
        if assignment is None or config.is_classroom_governed(assignment.grade):
            continue
        by_grade.setdefault(assignment.grade, []).append(sid)

    for grade in sorted(by_grade, key=lambda g: g.sort_index):
        students = by_grade[grade]
        groups.append(ReportGroup(
            kind=GroupKind.GRADE,
            title=grade.display_name,
            time=resolve_grade_time(config, grade, day),
            participants=_student_participants(students, by_student, roster),
            grade=grade,
        ))
        claimed.update(students)

    others = [sid for sid in by_student if sid not in claimed]
    if others:
        logger.info(f"{len(others)} Schüler ohne Mittagszeit am {service_date}")
        groups.append(ReportGroup(
            kind=GroupKind.OTHER,
            title=other_title,
            participants=_student_participants(others, by_student, roster),
        ))

    staff = [
        Participant(
            eater_id=uid,
            is_staff=True,
            display_name=roster.user_name(uid),
            meals=staff_meals,
        )
        for uid, staff_meals in by_staff.items()
        if uid not in owners
    ]
    if staff:
        groups.append(ReportGroup(
            kind=GroupKind.STAFF,
            title=staff_title,
            participants=sorted(staff, key=lambda p: p.sort_key),
        ))

    return groups


def build_classroom_report(
    service_date: date,
    teacher_id: int,
    roster: Roster,
    config: SchoolYearLunchConfig,
    orders: list[Order],
    teacher_directory: Optional[dict[int, User]] = None,
) -> list[ReportGroup]:
    """Bericht für eine einzelne Klasse: höchstens eine Gruppe."""
    directory = teacher_directory if teacher_directory is not None else roster.teacher_directory()
    teacher = directory.get(teacher_id)
    if teacher is None:
        logger.debug(f"Lehrkraft {teacher_id} nicht im Verzeichnis")
        return []

    meals = meals_on(orders, service_date)
    by_student, by_staff = _group_meals(meals)
    group = _classroom_group(
        teacher, Weekday.of(service_date), config, roster, by_student, by_staff, set()
    )
    return [group] if group is not None else []
