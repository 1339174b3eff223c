"""Interaktiver Setup-Wizard für die Ersteinrichtung der Mensa.

Führt den Nutzer Schritt für Schritt durch Bestellfenster, Preise und
Berichtstitel. Nutzt rich für die Konsolenausgabe.
"""

from datetime import date
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, FloatPrompt, IntPrompt, Prompt
from rich.table import Table
from rich import box

from config.schema import (
    CafeteriaConfig,
    OrderingWindowConfig,
    PricingConfig,
    ReportConfig,
)
from config.defaults import default_ordering_window
from models.time_rule import Anchor, PeriodUnit, RelativeTimeRule

console = Console()


def _header(title: str) -> None:
    console.print()
    console.print(Panel(f"[bold cyan]{title}[/bold cyan]", expand=False))


def _info(text: str) -> None:
    console.print(f"[dim]{text}[/dim]")


def _success(text: str) -> None:
    console.print(f"[green]✓[/green] {text}")


def _warn(text: str) -> None:
    console.print(f"[yellow]⚠[/yellow]  {text}")


def _show_ordering_window_table(ow: OrderingWindowConfig, sample: Optional[date] = None) -> None:
    """Zeigt die Regeln und ein Beispiel-Fenster als rich-Tabelle an."""
    sample = sample or date.today()
    window = ow.resolve(sample)
    table = Table(title="Bestellfenster", box=box.ROUNDED)
    table.add_column("Regel", style="bold", width=10)
    table.add_column("Beschreibung", width=44)
    table.add_column(f"Beispiel ({sample.strftime('%a %d.%m.')})", width=22)
    table.add_row("Start", ow.start.describe(), window.order_start.strftime("%a %d.%m. %H:%M"))
    table.add_row("Ende", ow.end.describe(), window.order_end.strftime("%a %d.%m. %H:%M"))
    console.print(table)
    if not window.is_open:
        _warn("Ende liegt nicht nach dem Start – es kann nie bestellt werden!")


# ─── BESTELLFENSTER ───

def _wizard_rule(label: str, current: RelativeTimeRule) -> RelativeTimeRule:
    """Fragt eine einzelne relative Zeitregel ab."""
    console.print(f"\n[bold]{label}[/bold]  [dim](aktuell: {current.describe()})[/dim]")
    while True:
        count = IntPrompt.ask("  Anzahl", default=current.count)
        unit = Prompt.ask("  Einheit", choices=[u.value for u in PeriodUnit],
                          default=current.unit.value)
        anchor = Prompt.ask("  Bezogen auf", choices=[a.value for a in Anchor],
                            default=current.anchor.value)
        clock = Prompt.ask("  Uhrzeit (HH:MM)", default=current.clock_time)
        try:
            return RelativeTimeRule(count=count, unit=PeriodUnit(unit),
                                    anchor=Anchor(anchor), clock_time=clock)
        except ValueError as e:
            _warn(f"Ungültige Eingabe: {e}")


def _wizard_ordering_window(current: Optional[OrderingWindowConfig] = None) -> OrderingWindowConfig:
    _header("Schritt 2: Bestellfenster")
    _info("Start und Ende werden relativ zum Ausgabetag bzw. zum Montag der "
          "Ausgabewoche angegeben.")
    current = current or default_ordering_window()
    _show_ordering_window_table(current)
    if Confirm.ask("Diese Regeln übernehmen?", default=True):
        return current

    ow = OrderingWindowConfig(
        start=_wizard_rule("Bestellstart", current.start),
        end=_wizard_rule("Bestellschluss", current.end),
    )
    _show_ordering_window_table(ow)
    _success("Bestellfenster konfiguriert.")
    return ow


# ─── PREISE ───

def _wizard_pricing(current: Optional[PricingConfig] = None) -> PricingConfig:
    _header("Schritt 3: Preise")
    current = current or PricingConfig()
    meal = FloatPrompt.ask("Preis pro Mahlzeit", default=current.meal_price)
    drink = FloatPrompt.ask("Preis nur Getränk", default=current.drink_only_price)
    return PricingConfig(meal_price=meal, drink_only_price=drink)


# ─── BERICHTE ───

def _wizard_reports(current: Optional[ReportConfig] = None) -> ReportConfig:
    _header("Schritt 4: Ausgabebericht")
    current = current or ReportConfig()
    other = Prompt.ask("Titel für Schüler ohne Mittagszeit", default=current.other_title)
    staff = Prompt.ask("Titel für Personal", default=current.staff_title)
    out = Prompt.ask("Exportverzeichnis", default=current.output_dir)
    return ReportConfig(other_title=other, staff_title=staff, output_dir=out)


# ─── ZUSAMMENFASSUNG ───

def _show_summary(config: CafeteriaConfig) -> None:
    _header("Zusammenfassung")
    table = Table(box=box.ROUNDED, title="Konfigurationsübersicht")
    table.add_column("Bereich", style="bold cyan")
    table.add_column("Wert")

    table.add_row("Schule", config.school_name)
    table.add_row("Datensatz", config.data_path)
    table.add_row("Bestellstart", config.ordering_window.start.describe())
    table.add_row("Bestellschluss", config.ordering_window.end.describe())
    table.add_row(
        "Preise",
        f"Mahlzeit {config.pricing.meal_price:.2f}, "
        f"Getränk {config.pricing.drink_only_price:.2f}"
    )
    table.add_row("Berichtstitel",
                  f"{config.reports.other_title} / {config.reports.staff_title}")
    console.print(table)


# ─── HAUPT-WIZARD ───

def run_wizard() -> Optional[CafeteriaConfig]:
    """Führt den interaktiven Setup-Wizard aus.

    Returns:
        Fertige CafeteriaConfig oder None, wenn der Nutzer abbricht.
    """
    console.print()
    console.print(Panel(
        "[bold]Willkommen beim Mensaplan![/bold]\n\n"
        "Der Wizard richtet Bestellfenster, Preise und Berichte ein.\n"
        "[dim]Standard-Werte können mit Enter übernommen werden.[/dim]",
        title="[bold cyan]Mensaplan[/bold cyan]",
        border_style="cyan",
    ))

    if not Confirm.ask("\nMöchten Sie jetzt die Mensa einrichten?", default=True):
        console.print("[yellow]Einrichtung abgebrochen.[/yellow]")
        return None

    try:
        _header("Schritt 1: Schule")
        name = Prompt.ask("Name der Schule", default="Musterschule")
        config = CafeteriaConfig(
            school_name=name,
            ordering_window=_wizard_ordering_window(),
            pricing=_wizard_pricing(),
            reports=_wizard_reports(),
        )

        _show_summary(config)

        if not Confirm.ask("\nKonfiguration speichern?", default=True):
            console.print("[yellow]Konfiguration wird nicht gespeichert.[/yellow]")
            return None

        _success("Konfiguration wird gespeichert...")
        return config

    except KeyboardInterrupt:
        console.print("\n[yellow]Wizard abgebrochen.[/yellow]")
        return None
