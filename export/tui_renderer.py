"""Gemeinsamer Renderer für die Terminal-Anzeige.

Liefert reine Tabellenzeilen (Listen von Strings); die Rich-Tabellen baut
main.py daraus. Namen aus den Daten werden für Rich-Markup maskiert.
"""

from typing import TYPE_CHECKING

from rich.markup import escape

if TYPE_CHECKING:
    from models.cafeteria_data import CafeteriaData
    from models.time_rule import MealServiceWindow
    from reports.kitchen_summary import KitchenSummary
    from reports.service_report import ReportGroup


def render_group_rows(group: "ReportGroup") -> list[list[str]]:
    """Tabellenzeilen einer Berichtsgruppe.

    Jede Zeile: [Name, Mahlzeit]. Bei mehreren Mahlzeiten steht der Name nur
    in der ersten Zeile.
    """
    from export.helpers import format_meal

    rows: list[list[str]] = []
    for p in group.participants:
        for i, meal in enumerate(p.meals):
            rows.append([escape(p.display_name) if i == 0 else "", escape(format_meal(meal))])
    return rows


def render_lunchtime_rows(
    data: "CafeteriaData", only_undetermined: bool = False
) -> list[list[str]]:
    """Zeilen der Wochenübersicht: [Schüler, Mo, Di, Mi, Do, Fr].

    Unbestimmte Zellen werden rot markiert (Rich-Markup).
    """
    from export.helpers import UNDETERMINED_LABEL
    from scheduling.lunchtime import find_undetermined, student_week

    cfg = data.lunch_config
    ids = sorted({s.id for s in data.roster.students} | set(cfg.student_ids))
    if only_undetermined:
        flagged = find_undetermined(cfg, ids)
        ids = [sid for sid in ids if sid in flagged]

    names = {sid: data.roster.student_name(sid) for sid in ids}
    rows: list[list[str]] = []
    for sid in sorted(ids, key=lambda i: (names[i].casefold(), i)):
        cells = [escape(names[sid])]
        for resolved in student_week(cfg, sid):
            if resolved.is_undetermined:
                cells.append(f"[red]{UNDETERMINED_LABEL}[/red]")
            else:
                cells.append(resolved.time)
        rows.append(cells)
    return rows


def render_window_rows(
    windows: list["MealServiceWindow"], now=None
) -> list[list[str]]:
    """Zeilen: [Ausgabetag, Start, Ende, Status]."""
    from datetime import datetime
    from export.helpers import format_service_date

    now = now or datetime.now()
    rows: list[list[str]] = []
    for w in windows:
        if not w.is_open:
            status = "[red]nie bestellbar[/red]"
        elif w.accepts_orders_at(now):
            status = "[green]offen[/green]"
        elif w.will_accept_orders(now):
            status = "[cyan]demnächst[/cyan]"
        else:
            status = "[dim]geschlossen[/dim]"
        rows.append([
            format_service_date(w.service_date),
            w.order_start.strftime("%a %d.%m. %H:%M"),
            w.order_end.strftime("%a %d.%m. %H:%M"),
            status,
        ])
    return rows


def render_kitchen_rows(kitchen: "KitchenSummary") -> list[list[str]]:
    """Zeilen: [Position, <Zeit 1>, …, ohne Zeit, Gesamt] plus Summenzeile."""
    buckets = kitchen.slots + [kitchen.unassigned]
    rows: list[list[str]] = []
    for total in kitchen.totals:
        cells = [escape(total.name)]
        for slot in buckets:
            qty = slot.quantity(total.key)
            cells.append(str(qty) if qty else "—")
        cells.append(str(total.quantity))
        rows.append(cells)
    rows.append(
        ["Mahlzeiten"] + [str(s.meal_count) for s in buckets] + [str(kitchen.meal_count)]
    )
    return rows
