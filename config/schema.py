from pathlib import Path
from datetime import date

from pydantic import BaseModel, Field, model_validator

from models.time_rule import Anchor, MealServiceWindow, PeriodUnit, RelativeTimeRule


# ─── BESTELLFENSTER ───

class OrderingWindowConfig(BaseModel):
    """Regeln für das Bestellfenster jedes Ausgabetags.

    Beide Regeln werden unabhängig voneinander aufgelöst. Liegt das Ende
    nicht nach dem Start, nimmt der Tag nie Bestellungen an.
    """
    # Bestellstart, z.B. "2 Wochen vor der Ausgabewoche, 00:00"
    start: RelativeTimeRule = Field(
        default_factory=lambda: RelativeTimeRule(
            count=2, unit=PeriodUnit.WEEKS,
            anchor=Anchor.WEEK_OF_SERVICE, clock_time="00:00"),
        description="Regel für den Bestellstart")
    # Bestellschluss, z.B. "1 Tag vor dem Ausgabetag, 10:00"
    end: RelativeTimeRule = Field(
        default_factory=lambda: RelativeTimeRule(
            count=1, unit=PeriodUnit.DAYS,
            anchor=Anchor.DAY_OF_SERVICE, clock_time="10:00"),
        description="Regel für den Bestellschluss")

    def resolve(self, service_date: date) -> MealServiceWindow:
        """Bestellfenster für einen Ausgabetag."""
        from scheduling.order_window import resolve_window
        return resolve_window(service_date, self.start, self.end)


# ─── PREISE ───

class PricingConfig(BaseModel):
    """Standardpreise (nur für Demo-Daten und Summen)."""
    # Preis einer vollständigen Mahlzeit
    meal_price: float = Field(4.50, ge=0.0,
        description="Preis pro Mahlzeit")
    # Preis, wenn nur ein Getränk bestellt wird
    drink_only_price: float = Field(1.00, ge=0.0,
        description="Preis nur Getränk")


# ─── BERICHTE ───

class ReportConfig(BaseModel):
    """Titel und Optionen des Ausgabeberichts."""
    # Titel der Gruppe für Schüler ohne verwertbare Zuordnung
    other_title: str = Field("Students With Unassigned Lunch Times",
        description="Titel der Gruppe ohne Mittagszeit")
    # Titel der Personal-Gruppe
    staff_title: str = Field("Staff Lunches",
        description="Titel der Personal-Gruppe")
    # Ausgabeverzeichnis für Excel-Exporte
    output_dir: str = Field("output",
        description="Verzeichnis für Exporte")

    @model_validator(mode='after')
    def validate_titles(self):
        if not self.other_title.strip() or not self.staff_title.strip():
            raise ValueError("Gruppentitel dürfen nicht leer sein")
        return self


# ─── GESAMT-CONFIG ───

class CafeteriaConfig(BaseModel):
    """Gesamtkonfiguration der Mensa."""
    # Name der Schule
    school_name: str = Field("Musterschule",
        description="Name der Schule")
    # Pfad zum Datensatz (JSON-Snapshot)
    data_path: str = Field("output/cafeteria_data.json",
        description="Pfad zum Datensatz")
    # Bestellfenster-Regeln
    ordering_window: OrderingWindowConfig = Field(default_factory=OrderingWindowConfig)
    # Standardpreise
    pricing: PricingConfig = Field(default_factory=PricingConfig)
    # Berichtstitel und Exportpfad
    reports: ReportConfig = Field(default_factory=ReportConfig)

    @property
    def data_file(self) -> Path:
        return Path(self.data_path)
