"""Gemeinsame Hilfsfunktionen für Excel-Export und Terminal-Ausgabe."""

from datetime import date
from typing import Optional

from models.order import Meal
from reports.service_report import GroupKind

# ─── Farbpalette (RRGGBB, ohne #) ─────────────────────────────────────────────

COLORS: dict[str, str] = {
    "classroom":    "B3D4FF",
    "grade":        "B3FFB3",
    "other":        "FF9999",
    "staff":        "FFF2B3",
    "undetermined": "FFCCCC",
    "header":       "4472C4",
    "total":        "DDDDDD",
}

# Rich-Farben pro Gruppenart
RICH_STYLES: dict[GroupKind, str] = {
    GroupKind.CLASSROOM: "cyan",
    GroupKind.GRADE:     "green",
    GroupKind.OTHER:     "red",
    GroupKind.STAFF:     "yellow",
}

UNDETERMINED_LABEL = "unbestimmt"


def today_str() -> str:
    """Gibt das heutige Datum als DD.MM.YYYY zurück."""
    return date.today().strftime("%d.%m.%Y")


def format_service_date(d: date) -> str:
    """Ausgabetag als "Mi 15.01.2025"."""
    names = ["Mo", "Di", "Mi", "Do", "Fr", "Sa", "So"]
    return f"{names[d.weekday()]} {d.strftime('%d.%m.%Y')}"


def format_time(time: Optional[str]) -> str:
    """Mittagszeit oder Platzhalter für unbestimmt."""
    return time if time else UNDETERMINED_LABEL


def format_meal(meal: Meal) -> str:
    """Positionen einer Mahlzeit, kommagetrennt."""
    return ", ".join(meal.item_names()) or "—"


def group_heading(title: str, time: Optional[str], service_date: date) -> str:
    """Überschrift einer Berichtsgruppe: "Mrs. Smith – Mi 15.01.2025 @ 11:30"."""
    heading = f"{title} – {format_service_date(service_date)}"
    return f"{heading} @ {time}" if time else heading
