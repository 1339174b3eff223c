"""Relative Zeitregel und Bestellfenster (Pydantic v2).

Eine RelativeTimeRule beschreibt deklarativ "N Tage/Wochen vor dem
Ausgabetag bzw. vor der Ausgabewoche, um HH:MM". Das Bestellfenster
(MealServiceWindow) ist immer abgeleitet und wird nie eigenständig gespeichert.
"""

import re
from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_CLOCK_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def validate_clock_time(value: str) -> str:
    """Prüft ein "HH:MM"-Uhrzeitformat (24h, mit führender Null)."""
    value = value.strip()
    if not _CLOCK_RE.match(value):
        raise ValueError(f"Ungültige Uhrzeit '{value}' (erwartet HH:MM)")
    return value


class PeriodUnit(str, Enum):
    DAYS = "days"
    WEEKS = "weeks"


class Anchor(str, Enum):
    DAY_OF_SERVICE = "day_of_service"
    WEEK_OF_SERVICE = "week_of_service"


# Größter Versatz (ca. 10 Jahre); hält anchor - offset im date-Bereich
MAX_OFFSET_DAYS = 3660


class RelativeTimeRule(BaseModel):
    """Regel "count unit vor anchor, um clock_time" (unveränderlicher Wert)."""

    model_config = ConfigDict(frozen=True)

    # Anzahl Perioden vor dem Anker (0 = am Anker selbst)
    count: int = Field(ge=0)
    # Tage oder Wochen
    unit: PeriodUnit = PeriodUnit.DAYS
    # Ausgabetag oder Montag der Ausgabewoche
    anchor: Anchor = Anchor.DAY_OF_SERVICE
    # Uhrzeit im Format "HH:MM"
    clock_time: str = "00:00"

    @field_validator("clock_time")
    @classmethod
    def _check_clock_time(cls, v: str) -> str:
        return validate_clock_time(v)

    @model_validator(mode="after")
    def _check_offset(self):
        if self.offset_days > MAX_OFFSET_DAYS:
            raise ValueError(
                f"Versatz von {self.offset_days} Tagen zu groß (max. {MAX_OFFSET_DAYS})"
            )
        return self

    @property
    def offset_days(self) -> int:
        """Versatz in Tagen (Wochen × 7)."""
        return self.count * 7 if self.unit == PeriodUnit.WEEKS else self.count

    def describe(self) -> str:
        """Kurzbeschreibung, z.B. "2 week(s) prior to week of meal @08:00"."""
        unit = "day(s)" if self.unit == PeriodUnit.DAYS else "week(s)"
        target = "day" if self.anchor == Anchor.DAY_OF_SERVICE else "week"
        return f"{self.count} {unit} prior to {target} of meal @{self.clock_time}"


class MealServiceWindow(BaseModel):
    """Absolutes Bestellfenster für einen Ausgabetag.

    Ein Fenster mit order_end <= order_start ist kein Fehler, sondern bedeutet
    "Bestellung geschlossen".
    """

    model_config = ConfigDict(frozen=True)

    service_date: date
    order_start: datetime
    order_end: datetime

    @property
    def is_open(self) -> bool:
        """True wenn das Fenster eine positive Dauer hat."""
        return self.order_end > self.order_start

    def accepts_orders_at(self, now: datetime) -> bool:
        """Bestellungen werden im halboffenen Intervall [start, end) angenommen."""
        return self.is_open and self.order_start <= now < self.order_end

    def will_accept_orders(self, now: datetime) -> bool:
        """True wenn jetzt oder künftig noch bestellt werden kann."""
        return self.is_open and self.order_end > now

    def describe(self) -> str:
        """Lesbare Darstellung: "Mon 01/06 @08:00 - Fri 01/10 @10:00"."""
        fmt = "%a %m/%d @%H:%M"
        return f"{self.order_start.strftime(fmt)} - {self.order_end.strftime(fmt)}"
