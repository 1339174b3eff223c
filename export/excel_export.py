"""Excel-Export für den Ausgabebericht (openpyxl)."""

import re
from datetime import date
from pathlib import Path
from typing import Optional

from reports.kitchen_summary import KitchenSummary
from reports.service_report import GroupKind, ReportGroup

from export.helpers import (
    COLORS, format_meal, format_service_date, format_time, group_heading, today_str,
)

_INVALID_SHEET_CHARS = re.compile(r"[\[\]:*?/\\]")


class ReportExcelExporter:
    """Exportiert einen Ausgabebericht: Übersicht, ein Blatt pro Gruppe, Küche."""

    # Spaltenbreiten (Excel-Einheiten)
    COL_NAME_W  = 28
    COL_MEAL_W  = 60

    # Zeilenhöhen (Punkte)
    ROW_HEADER_H = 22

    def __init__(
        self,
        groups: list[ReportGroup],
        service_date: date,
        school_name: str = "",
        kitchen: Optional[KitchenSummary] = None,
    ):
        self.groups       = groups
        self.service_date = service_date
        self.school_name  = school_name
        self.kitchen      = kitchen

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def export(self, output_path: Path) -> Path:
        """Erstellt die Excel-Datei mit allen Sheets."""
        from openpyxl import Workbook
        wb = Workbook()
        wb.remove(wb.active)   # Leeres Standard-Sheet entfernen

        self._sheet_uebersicht(wb)

        used: set[str] = {"Übersicht"}
        for group in self.groups:
            self._sheet_gruppe(wb, group, self._sheet_title(group.title, used))

        if self.kitchen is not None:
            self._sheet_kueche(wb, self.kitchen)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(output_path)
        return output_path

    # ─── Style-Helpers ────────────────────────────────────────────────────────

    def _fill(self, hex_color: str):
        from openpyxl.styles import PatternFill
        return PatternFill(start_color=hex_color, end_color=hex_color, fill_type="solid")

    def _thin_border(self):
        from openpyxl.styles import Border, Side
        s = Side(border_style="thin", color="BBBBBB")
        return Border(left=s, right=s, top=s, bottom=s)

    def _sheet_title(self, title: str, used: set[str]) -> str:
        """Gültiger, eindeutiger Blattname (max. 31 Zeichen)."""
        base = _INVALID_SHEET_CHARS.sub("_", title).strip() or "Gruppe"
        base = base[:31]
        candidate, n = base, 2
        while candidate in used:
            suffix = f" ({n})"
            candidate = base[: 31 - len(suffix)] + suffix
            n += 1
        used.add(candidate)
        return candidate

    def _write_header(self, ws, row: int, headers: list[str]) -> None:
        from openpyxl.styles import Font
        fill = self._fill(COLORS["header"])
        border = self._thin_border()
        for col, text in enumerate(headers, 1):
            cell = ws.cell(row=row, column=col, value=text)
            cell.fill = fill
            cell.font = Font(bold=True, color="FFFFFF")
            cell.border = border
        ws.row_dimensions[row].height = self.ROW_HEADER_H

    # ─── Sheet: Übersicht ─────────────────────────────────────────────────────

    def _sheet_uebersicht(self, wb) -> None:
        from openpyxl.styles import Font
        ws = wb.create_sheet(title="Übersicht", index=0)

        row = 1
        ws.cell(row=row, column=1, value=self.school_name or "Ausgabebericht").font = Font(bold=True, size=14)
        row += 1
        ws.cell(row=row, column=1, value=f"Ausgabetag: {format_service_date(self.service_date)}")
        ws.cell(row=row, column=3, value=f"Erstellt: {today_str()}")
        row += 2

        self._write_header(ws, row, ["Gruppe", "Art", "Zeit", "Esser", "Mahlzeiten"])
        row += 1

        border = self._thin_border()
        for group in self.groups:
            values = [
                group.title, group.kind.value, format_time(group.time),
                len(group.participants), group.meal_count,
            ]
            for col, v in enumerate(values, 1):
                c = ws.cell(row=row, column=col, value=v)
                c.border = border
                c.fill = self._fill(COLORS[group.kind.value])
            if group.time is None and group.kind in (GroupKind.CLASSROOM, GroupKind.GRADE):
                ws.cell(row=row, column=3).fill = self._fill(COLORS["undetermined"])
            row += 1

        if not self.groups:
            ws.cell(row=row, column=1, value="Keine Mahlzeiten an diesem Tag.")
        else:
            c = ws.cell(row=row, column=1, value="Gesamt")
            c.font = Font(bold=True)
            ws.cell(row=row, column=4, value=sum(len(g.participants) for g in self.groups))
            ws.cell(row=row, column=5, value=sum(g.meal_count for g in self.groups))
            for col in range(1, 6):
                ws.cell(row=row, column=col).fill = self._fill(COLORS["total"])

        ws.column_dimensions["A"].width = 40
        ws.column_dimensions["B"].width = 12
        ws.column_dimensions["C"].width = 8
        ws.column_dimensions["D"].width = 8
        ws.column_dimensions["E"].width = 12

    # ─── Sheet: Gruppe ────────────────────────────────────────────────────────

    def _sheet_gruppe(self, wb, group: ReportGroup, title: str) -> None:
        """Eine Zeile pro Mahlzeit; der Name steht nur in der ersten Zeile."""
        from openpyxl.styles import Font
        ws = wb.create_sheet(title=title)

        ws.cell(row=1, column=1,
                value=group_heading(group.title, group.time, self.service_date)).font = Font(bold=True, size=12)
        self._write_header(ws, 3, ["Name", "Mahlzeit"])

        border = self._thin_border()
        row = 4
        for p in group.participants:
            for i, meal in enumerate(p.meals):
                name_cell = ws.cell(row=row, column=1, value=p.display_name if i == 0 else "")
                name_cell.border = border
                if p.is_staff and group.kind == GroupKind.CLASSROOM:
                    name_cell.font = Font(italic=True)
                ws.cell(row=row, column=2, value=format_meal(meal)).border = border
                row += 1

        ws.column_dimensions["A"].width = self.COL_NAME_W
        ws.column_dimensions["B"].width = self.COL_MEAL_W

    # ─── Sheet: Küche ─────────────────────────────────────────────────────────

    def _sheet_kueche(self, wb, kitchen: KitchenSummary) -> None:
        """Mengen pro Position und Ausgabezeit, letzte Spalten Rest und Gesamt."""
        from openpyxl.styles import Font
        ws = wb.create_sheet(title="Küche")

        slot_labels = [s.time for s in kitchen.slots] + ["ohne Zeit", "Gesamt"]
        self._write_header(ws, 1, ["Position", "Typ"] + slot_labels)

        border = self._thin_border()
        row = 2
        for total in kitchen.totals:
            ws.cell(row=row, column=1, value=total.name).border = border
            ws.cell(row=row, column=2, value=total.type.name.title()).border = border
            buckets = kitchen.slots + [kitchen.unassigned]
            for col, slot in enumerate(buckets, 3):
                qty = slot.quantity(total.key)
                ws.cell(row=row, column=col, value=qty).border = border
            c = ws.cell(row=row, column=len(buckets) + 3, value=total.quantity)
            c.border = border
            c.font = Font(bold=True)
            row += 1

        ws.cell(row=row, column=1, value="Mahlzeiten").font = Font(bold=True)
        for col, slot in enumerate(kitchen.slots + [kitchen.unassigned], 3):
            ws.cell(row=row, column=col, value=slot.meal_count)
        ws.cell(row=row, column=len(kitchen.slots) + 4, value=kitchen.meal_count)

        ws.column_dimensions["A"].width = 28
        ws.column_dimensions["B"].width = 10
