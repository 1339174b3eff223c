"""Bestellfenster-Berechnung für Ausgabetage.

Aus einer Start- und einer End-Regel (RelativeTimeRule) wird für einen
Ausgabetag das absolute Bestellfenster berechnet:

  Anker   = Ausgabetag            (DAY_OF_SERVICE)
          | Montag der Ausgabewoche (WEEK_OF_SERVICE)
  Versatz = count                 (DAYS)
          | count × 7             (WEEKS)
  Zeitpunkt = (Anker − Versatz) um clock_time

Reine Datumsarithmetik, keine Zeitzonen-Umrechnung: die lokale Tagesgrenze
liegt beim Aufrufer.
"""

import logging
from datetime import date, datetime, time, timedelta
from typing import Iterable

from models.time_rule import Anchor, MealServiceWindow, RelativeTimeRule

logger = logging.getLogger(__name__)


def week_start(d: date) -> date:
    """Montag der Kalenderwoche, die d enthält."""
    return d - timedelta(days=d.weekday())


def anchor_date(service_date: date, anchor: Anchor) -> date:
    if anchor == Anchor.WEEK_OF_SERVICE:
        return week_start(service_date)
    return service_date


def resolve_instant(service_date: date, rule: RelativeTimeRule) -> datetime:
    """Berechnet den absoluten Zeitpunkt einer einzelnen Regel."""
    target = anchor_date(service_date, rule.anchor) - timedelta(days=rule.offset_days)
    hours, minutes = (int(p) for p in rule.clock_time.split(":"))
    return datetime.combine(target, time(hours, minutes))


def resolve_window(
    service_date: date,
    start_rule: RelativeTimeRule,
    end_rule: RelativeTimeRule,
) -> MealServiceWindow:
    """Berechnet das Bestellfenster für einen Ausgabetag.

    Start und Ende werden unabhängig voneinander berechnet. Ein Fenster mit
    Ende <= Start wird nicht abgelehnt; es bedeutet "nimmt nie Bestellungen an".
    """
    window = MealServiceWindow(
        service_date=service_date,
        order_start=resolve_instant(service_date, start_rule),
        order_end=resolve_instant(service_date, end_rule),
    )
    if not window.is_open:
        logger.debug(
            f"Bestellfenster für {service_date} ist leer "
            f"({window.order_start} – {window.order_end})"
        )
    return window


def schedule_windows(
    service_dates: Iterable[date],
    start_rule: RelativeTimeRule,
    end_rule: RelativeTimeRule,
) -> list[MealServiceWindow]:
    """Ein Bestellfenster pro Ausgabetag, nach Datum sortiert (Duplikate entfernt).

    Wird genutzt, wenn ein Menü auf mehrere Tage übertragen wird.
    """
    return [
        resolve_window(d, start_rule, end_rule)
        for d in sorted(set(service_dates))
    ]
