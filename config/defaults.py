from config.schema import (
    CafeteriaConfig,
    OrderingWindowConfig,
    PricingConfig,
    ReportConfig,
)
from models.grade import GradeLevel, SCHOOL_DAYS, Weekday
from models.order import ItemType
from models.time_rule import Anchor, PeriodUnit, RelativeTimeRule


def default_ordering_window() -> OrderingWindowConfig:
    """Standard-Bestellfenster einer Grundschule.

    Start:  2 Wochen vor dem Montag der Ausgabewoche, 00:00
    Ende:   1 Tag vor dem Ausgabetag, 10:00

    Beispiel Ausgabetag Mi 15.01.:
      Start  Mo 30.12. 00:00
      Ende   Di 14.01. 10:00
    """
    return OrderingWindowConfig(
        start=RelativeTimeRule(count=2, unit=PeriodUnit.WEEKS,
                               anchor=Anchor.WEEK_OF_SERVICE, clock_time="00:00"),
        end=RelativeTimeRule(count=1, unit=PeriodUnit.DAYS,
                             anchor=Anchor.DAY_OF_SERVICE, clock_time="10:00"),
    )


def default_cafeteria_config() -> CafeteriaConfig:
    """Komplette Default-Konfiguration."""
    return CafeteriaConfig(
        school_name="Musterschule",
        ordering_window=default_ordering_window(),
        pricing=PricingConfig(),
        reports=ReportConfig(),
    )


# ─── MITTAGSZEITEN ───
# Schulweiter Pool pro Wochentag. Nur Auswahlliste, nie Rückfallwert!

DEFAULT_SCHOOL_TIMES: dict[Weekday, list[str]] = {
    day: ["11:00", "11:30", "12:00", "12:30"] for day in SCHOOL_DAYS
}

# Jüngere Jahrgänge essen mit ihrer Klasse (Zeit über die Klassenlehrkraft)
DEFAULT_CLASSROOM_GRADES: list[GradeLevel] = [
    GradeLevel.PRE_K,
    GradeLevel.KINDERGARTEN,
    GradeLevel.FIRST,
    GradeLevel.SECOND,
]

# Jahrgang → Standard-Mittagszeit (nicht klassenweise)
DEFAULT_GRADE_TIMES: dict[GradeLevel, str] = {
    GradeLevel.THIRD:   "11:30",
    GradeLevel.FOURTH:  "11:30",
    GradeLevel.FIFTH:   "12:00",
    GradeLevel.SIXTH:   "12:00",
    GradeLevel.SEVENTH: "12:30",
    GradeLevel.EIGHTH:  "12:30",
}


# ─── SPEISEPLAN ───
# Positionen für Demo-Bestellungen: (Name, Typ)

DEFAULT_MENU_ITEMS: list[tuple[str, ItemType]] = [
    ("Chicken Nuggets",    ItemType.ENTREE),
    ("Cheese Pizza",       ItemType.ENTREE),
    ("Turkey Sandwich",    ItemType.ENTREE),
    ("Mac & Cheese",       ItemType.ENTREE),
    ("Green Beans",        ItemType.SIDE),
    ("Apple Slices",       ItemType.SIDE),
    ("Carrot Sticks",      ItemType.SIDE),
    ("Chocolate Chip Cookie", ItemType.DESSERT),
    ("Fruit Cup",          ItemType.DESSERT),
    ("Milk",               ItemType.DRINK),
    ("Chocolate Milk",     ItemType.DRINK),
    ("Water",              ItemType.DRINK),
]
