"""Jahrgangsstufen und Wochentage."""

from datetime import date
from enum import Enum, IntEnum


class GradeLevel(str, Enum):
    """Jahrgangsstufe; der Wert entspricht dem gespeicherten Kürzel."""

    PRE_K2 = "pk2"
    PRE_K3 = "pk3"
    PRE_K4 = "pk4"
    PRE_K = "pk"
    KINDERGARTEN = "k"
    FIRST = "1"
    SECOND = "2"
    THIRD = "3"
    FOURTH = "4"
    FIFTH = "5"
    SIXTH = "6"
    SEVENTH = "7"
    EIGHTH = "8"
    NINTH = "9"
    TENTH = "10"
    ELEVENTH = "11"
    TWELFTH = "12"

    @property
    def display_name(self) -> str:
        return _GRADE_NAMES[self]

    @property
    def sort_index(self) -> int:
        """Position in der natürlichen Reihenfolge (Pre-K2 … 12th)."""
        return _GRADE_ORDER.index(self)


_GRADE_NAMES: dict[GradeLevel, str] = {
    GradeLevel.PRE_K2: "Pre-K2",
    GradeLevel.PRE_K3: "Pre-K3",
    GradeLevel.PRE_K4: "Pre-K4",
    GradeLevel.PRE_K: "Pre-K",
    GradeLevel.KINDERGARTEN: "Kind.",
    GradeLevel.FIRST: "1st",
    GradeLevel.SECOND: "2nd",
    GradeLevel.THIRD: "3rd",
    GradeLevel.FOURTH: "4th",
    GradeLevel.FIFTH: "5th",
    GradeLevel.SIXTH: "6th",
    GradeLevel.SEVENTH: "7th",
    GradeLevel.EIGHTH: "8th",
    GradeLevel.NINTH: "9th",
    GradeLevel.TENTH: "10th",
    GradeLevel.ELEVENTH: "11th",
    GradeLevel.TWELFTH: "12th",
}

_GRADE_ORDER: list[GradeLevel] = list(GradeLevel)


class Weekday(IntEnum):
    """Wochentag, kompatibel zu date.weekday() (0=Montag)."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def of(cls, d: date) -> "Weekday":
        return cls(d.weekday())

    @property
    def short_name(self) -> str:
        return self.name[:3].title()


# Schultage, für die Mittagszeiten aufgelöst werden
SCHOOL_DAYS: tuple[Weekday, ...] = (
    Weekday.MONDAY,
    Weekday.TUESDAY,
    Weekday.WEDNESDAY,
    Weekday.THURSDAY,
    Weekday.FRIDAY,
)
