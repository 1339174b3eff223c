"""Berichte: Ausgabebericht nach Gruppen und Küchenübersicht."""

from .service_report import (
    GroupKind,
    Participant,
    ReportGroup,
    build_classroom_report,
    build_service_report,
)
from .kitchen_summary import ItemCount, KitchenSlot, KitchenSummary, build_kitchen_summary

__all__ = [
    "GroupKind",
    "Participant",
    "ReportGroup",
    "build_classroom_report",
    "build_service_report",
    "ItemCount",
    "KitchenSlot",
    "KitchenSummary",
    "build_kitchen_summary",
]
