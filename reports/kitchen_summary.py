"""Küchenübersicht: Mahlzeiten und Mengen pro schulweiter Mittagszeit."""

import logging
from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from models.grade import Weekday
from models.lunch_config import SchoolYearLunchConfig
from models.order import ItemType, Meal, Order, meals_on
from models.roster import Roster
from scheduling.lunchtime import resolve_student_time, resolve_teacher_time

logger = logging.getLogger(__name__)


class ItemCount(BaseModel):
    name: str
    type: ItemType
    quantity: int = 0

    @property
    def key(self) -> tuple[int, str]:
        return (int(self.type), self.name.casefold())


class KitchenSlot(BaseModel):
    """Alle Mahlzeiten einer Ausgabezeit; time=None ist der Rest-Topf."""

    time: Optional[str] = None
    meals: list[Meal] = []
    items: list[ItemCount] = []

    @property
    def meal_count(self) -> int:
        return len(self.meals)

    def quantity(self, key: tuple[int, str]) -> int:
        """Menge einer Position (Schlüssel wie MealItem.key), 0 wenn nicht bestellt."""
        return next((i.quantity for i in self.items if i.key == key), 0)


class KitchenSummary(BaseModel):
    service_date: date
    slots: list[KitchenSlot] = []
    unassigned: KitchenSlot = Field(default_factory=KitchenSlot)
    totals: list[ItemCount] = []

    @property
    def meal_count(self) -> int:
        return sum(s.meal_count for s in self.slots) + self.unassigned.meal_count


def count_items(meals: list[Meal]) -> list[ItemCount]:
    """Mengen pro Position, sortiert nach Typ und Name.

    Positionen gleichen Typs und Namens (ohne Groß-/Kleinschreibung) werden
    zusammengezählt; angezeigt wird die zuerst gesehene Schreibweise.
    """
    counts: dict[tuple[int, str], ItemCount] = {}
    for meal in meals:
        for item in meal.items:
            entry = counts.setdefault(item.key, ItemCount(name=item.name, type=item.type))
            entry.quantity += 1
    return [counts[k] for k in sorted(counts)]


def _meal_times(
    meal: Meal, day: Weekday, config: SchoolYearLunchConfig, teacher_ids: set[int]
) -> set[str]:
    """Alle Zeiten, zu denen die Mahlzeit passen würde."""
    times: set[str] = set()
    if meal.time:
        times.add(meal.time)
    if meal.student_id is not None:
        resolved = resolve_student_time(config, meal.student_id, day)
        if resolved.time:
            times.add(resolved.time)
    elif meal.staff_member_id in teacher_ids:
        t = resolve_teacher_time(config, meal.staff_member_id, day)
        if t:
            times.add(t)
    return times


def build_kitchen_summary(
    service_date: date,
    roster: Roster,
    config: SchoolYearLunchConfig,
    orders: list[Order],
) -> KitchenSummary:
    """Verteilt die Mahlzeiten eines Tages auf die schulweiten Zeiten.

    Eine Mahlzeit gehört zur ersten Zeit (aufsteigend), zu der ihre gewählte
    Zeit, die aufgelöste Schülerzeit oder die Zeit der essenden Lehrkraft
    passt. Alles andere landet im Rest-Topf.
    """
    day = Weekday.of(service_date)
    meals = meals_on(orders, service_date)
    teacher_ids = set(roster.teacher_directory())
    slot_times = config.school_times_for(day)

    buckets: dict[str, list[Meal]] = {t: [] for t in slot_times}
    leftover: list[Meal] = []
    for meal in meals:
        times = _meal_times(meal, day, config, teacher_ids)
        slot = next((t for t in slot_times if t in times), None)
        if slot is None:
            leftover.append(meal)
        else:
            buckets[slot].append(meal)

    if leftover:
        logger.info(f"{len(leftover)} Mahlzeit(en) am {service_date} ohne Ausgabezeit")

    return KitchenSummary(
        service_date=service_date,
        slots=[
            KitchenSlot(time=t, meals=buckets[t], items=count_items(buckets[t]))
            for t in slot_times
        ],
        unassigned=KitchenSlot(meals=leftover, items=count_items(leftover)),
        totals=count_items(meals),
    )
