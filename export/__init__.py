"""Export-Modul: Excel (openpyxl) und Terminal-Zeilen für Berichte."""

from export.excel_export import ReportExcelExporter

__all__ = ["ReportExcelExporter"]
