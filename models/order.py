"""Datenmodelle für Bestellungen und Mahlzeiten (Pydantic v2)."""

from datetime import date
from enum import IntEnum
from typing import Optional

from pydantic import BaseModel, field_validator, model_validator

from models.time_rule import validate_clock_time


class ItemType(IntEnum):
    ENTREE = 0
    SIDE = 1
    DESSERT = 2
    DRINK = 3


class MealItem(BaseModel):
    """Eine Position einer Mahlzeit (Hauptgericht, Beilage, …)."""

    name: str
    type: ItemType = ItemType.ENTREE
    price: float = 0.0

    @property
    def key(self) -> tuple[int, str]:
        """Vergleichsschlüssel: Typ + Name ohne Groß-/Kleinschreibung."""
        return (int(self.type), self.name.casefold())


class Meal(BaseModel):
    """Eine bestellte Mahlzeit für genau einen Ausgabetag.

    Gegessen wird sie entweder von einem Schüler (student_id) oder einer
    Lehr-/Personalkraft (staff_member_id). Gespendete Mahlzeiten haben keinen
    Esser.
    """

    id: int
    date: date
    student_id: Optional[int] = None
    staff_member_id: Optional[int] = None
    time: Optional[str] = None        # Beim Bestellen gewählte Mittagszeit
    items: list[MealItem] = []

    @field_validator("time")
    @classmethod
    def _check_time(cls, v: Optional[str]) -> Optional[str]:
        return validate_clock_time(v) if v else None

    @model_validator(mode="after")
    def _check_single_eater(self):
        if self.student_id is not None and self.staff_member_id is not None:
            raise ValueError(
                f"Mahlzeit {self.id}: Schüler und Personal gleichzeitig gesetzt"
            )
        return self

    def item_names(self) -> list[str]:
        return [i.name for i in self.items]


class Order(BaseModel):
    """Eine Bestellung (ein Warenkorb-Checkout) mit beliebig vielen Mahlzeiten."""

    id: int
    user_id: int
    date: date                        # Bestelldatum, nicht Ausgabetag
    meals: list[Meal] = []
    taxes: float = 0.0
    processing_fee: float = 0.0
    other_fees: float = 0.0


def meals_on(orders: list[Order], service_date: date) -> list[Meal]:
    """Alle Mahlzeiten aller Bestellungen für einen Ausgabetag (in Bestellreihenfolge)."""
    return [m for o in orders for m in o.meals if m.date == service_date]
