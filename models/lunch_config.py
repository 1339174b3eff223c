"""SchoolYearLunchConfig: Mittagszeiten-Konfiguration eines Schuljahres (Pydantic v2).

Das Aggregat bündelt alle drei Zuordnungsmechanismen:
  - schulweite Zeiten pro Wochentag (nur Auswahl-Pool, nie Rückfallwert)
  - Jahrgangszeiten pro (Jahrgang, Wochentag)
  - Lehrerzeiten pro (Lehrkraft, Wochentag)
sowie die Schülerzuordnungen pro (Schüler, Wochentag) und die Menge der
Jahrgänge, deren Zeit über die Klassenlehrkraft bestimmt wird.

Gespeichert wird als Folgen von Datensätzen (JSON/YAML-freundlich); die
Nachschlage-Indizes werden nach der Validierung privat aufgebaut. Aggregat
und Datensätze sind unveränderlich, Änderungen laufen über replace().
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, PrivateAttr, field_validator, model_validator

from models.grade import GradeLevel, Weekday
from models.time_rule import validate_clock_time


def normalize_times(times: list[str]) -> list[str]:
    """Validiert "HH:MM"-Zeiten, entfernt Duplikate und sortiert aufsteigend.

    Danach gilt: erstes Element == früheste Zeit.
    """
    return sorted({validate_clock_time(t) for t in times})


# ─── Datensätze ───────────────────────────────────────────────────────────────

class DailyLunchTimes(BaseModel):
    """Schulweite Zeiten eines Wochentags."""

    model_config = ConfigDict(frozen=True)

    day: Weekday
    times: tuple[str, ...] = ()

    @field_validator("times")
    @classmethod
    def _normalize(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(normalize_times(v))


class GradeLunchTimes(BaseModel):
    """Veröffentlichte Zeiten eines Jahrgangs an einem Wochentag."""

    model_config = ConfigDict(frozen=True)

    grade: GradeLevel
    day: Weekday
    times: tuple[str, ...] = ()

    @field_validator("times")
    @classmethod
    def _normalize(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(normalize_times(v))


class TeacherLunchTimes(BaseModel):
    """Veröffentlichte Zeiten einer Lehrkraft (Klasse) an einem Wochentag."""

    model_config = ConfigDict(frozen=True)

    teacher_id: int
    day: Weekday
    times: tuple[str, ...] = ()

    @field_validator("times")
    @classmethod
    def _normalize(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(normalize_times(v))


class StudentAssignment(BaseModel):
    """Zuordnung eines Schülers an einem Wochentag.

    teacher_id ist nur gesetzt, wenn der Jahrgang klassenweise zugeordnet wird.
    """

    model_config = ConfigDict(frozen=True)

    student_id: int
    day: Weekday
    grade: GradeLevel
    teacher_id: Optional[int] = None


# ─── Aggregat ─────────────────────────────────────────────────────────────────

class SchoolYearLunchConfig(BaseModel):
    """Vollständige Mittagszeiten-Konfiguration eines Schuljahres."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    school_times: tuple[DailyLunchTimes, ...] = ()
    grade_times: tuple[GradeLunchTimes, ...] = ()
    teacher_times: tuple[TeacherLunchTimes, ...] = ()
    grades_by_classroom: tuple[GradeLevel, ...] = ()
    student_assignments: tuple[StudentAssignment, ...] = ()

    _school_index: dict[Weekday, tuple[str, ...]] = PrivateAttr(default_factory=dict)
    _grade_index: dict[tuple[GradeLevel, Weekday], tuple[str, ...]] = PrivateAttr(default_factory=dict)
    _teacher_index: dict[tuple[int, Weekday], tuple[str, ...]] = PrivateAttr(default_factory=dict)
    _assignment_index: dict[tuple[int, Weekday], StudentAssignment] = PrivateAttr(default_factory=dict)

    @field_validator("grades_by_classroom")
    @classmethod
    def _dedupe_grades(cls, v: tuple[GradeLevel, ...]) -> tuple[GradeLevel, ...]:
        return tuple(sorted(set(v), key=lambda g: g.sort_index))

    @model_validator(mode="after")
    def _check_unique_keys(self):
        """Pro Schlüssel höchstens ein Zeiten-Datensatz.

        Doppelte Schülerzuordnungen werden beim Laden toleriert (Fremddaten):
        die Auflösung nutzt den ersten Datensatz, der Konsistenz-Check meldet
        sie als Fehler.
        """
        checks = [
            ("Schulweite Zeiten", [(r.day,) for r in self.school_times]),
            ("Jahrgangszeiten", [(r.grade, r.day) for r in self.grade_times]),
            ("Lehrerzeiten", [(r.teacher_id, r.day) for r in self.teacher_times]),
        ]
        for label, keys in checks:
            seen: set[tuple] = set()
            for key in keys:
                if key in seen:
                    raise ValueError(f"{label}: doppelter Eintrag für {key}")
                seen.add(key)
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError(
                f"Schuljahr endet ({self.end_date}) vor dem Beginn ({self.start_date})"
            )
        return self

    def model_post_init(self, __context) -> None:
        self._school_index = {r.day: r.times for r in self.school_times}
        self._grade_index = {(r.grade, r.day): r.times for r in self.grade_times}
        self._teacher_index = {(r.teacher_id, r.day): r.times for r in self.teacher_times}
        self._assignment_index = {}
        for a in self.student_assignments:
            self._assignment_index.setdefault((a.student_id, a.day), a)

    def replace(self, **changes) -> "SchoolYearLunchConfig":
        """Neue, validierte Konfiguration mit geänderten Feldern und frischen Indizes."""
        data = self.model_dump()
        data.update(changes)
        return type(self).model_validate(data)

    def model_copy(self, *, update=None, deep: bool = False) -> "SchoolYearLunchConfig":
        # Ein einfaches Kopieren mit update würde die alten Indizes übernehmen
        if update:
            return self.replace(**update)
        return super().model_copy(deep=deep)

    # ─── Nachschlagen ───

    def assignment_for(self, student_id: int, day: Weekday) -> Optional[StudentAssignment]:
        return self._assignment_index.get((student_id, Weekday(day)))

    def grade_times_for(self, grade: GradeLevel, day: Weekday) -> list[str]:
        return list(self._grade_index.get((grade, Weekday(day)), []))

    def teacher_times_for(self, teacher_id: int, day: Weekday) -> list[str]:
        return list(self._teacher_index.get((teacher_id, Weekday(day)), []))

    def school_times_for(self, day: Weekday) -> list[str]:
        """Schulweiter Pool eines Tages – nur für Auswahllisten, nie zur Auflösung."""
        return list(self._school_index.get(Weekday(day), []))

    def is_classroom_governed(self, grade: GradeLevel) -> bool:
        return grade in self.grades_by_classroom

    def assignments_for(self, student_id: int, day: Weekday) -> list[StudentAssignment]:
        """Alle Datensätze für (Schüler, Tag); mehr als einer ist ein Datenfehler."""
        day = Weekday(day)
        return [
            a for a in self.student_assignments
            if a.student_id == student_id and a.day == day
        ]

    def duplicate_assignments(self) -> list[tuple[int, Weekday]]:
        """(Schüler, Tag)-Schlüssel mit mehr als einer Zuordnung."""
        seen: set[tuple[int, Weekday]] = set()
        dupes: list[tuple[int, Weekday]] = []
        for a in self.student_assignments:
            key = (a.student_id, a.day)
            if key in seen and key not in dupes:
                dupes.append(key)
            seen.add(key)
        return dupes

    @property
    def student_ids(self) -> list[int]:
        """Alle Schüler mit mindestens einer Zuordnung (sortiert)."""
        return sorted({a.student_id for a in self.student_assignments})

    @property
    def teacher_ids(self) -> list[int]:
        """Alle Lehrkräfte, die in Zeiten oder Zuordnungen vorkommen (sortiert)."""
        ids = {r.teacher_id for r in self.teacher_times}
        ids |= {a.teacher_id for a in self.student_assignments if a.teacher_id is not None}
        return sorted(ids)
