"""Mensaplan — Haupt-CLI.

Verwendung:
  mensaplan setup                          Ersteinrichtung (Wizard)
  mensaplan setup --defaults               Default-Konfiguration ohne Wizard
  mensaplan config show                    Konfiguration anzeigen
  mensaplan config edit                    Konfiguration bearbeiten
  mensaplan generate                       Demo-Datensatz erzeugen + speichern
  mensaplan check                          Konsistenz-Check
  mensaplan window 2025-01-15 [...]        Bestellfenster für Ausgabetage
  mensaplan lunchtimes                     Mittagszeiten Mo–Fr pro Schüler
  mensaplan report 2025-01-15              Ausgabebericht (nach Gruppen)
  mensaplan report 2025-01-15 --teacher 7  Bericht einer Klasse
  mensaplan kitchen 2025-01-15             Küchenübersicht pro Ausgabezeit

Globale Optionen: --config PFAD, --verbose
"""

import logging
import sys
from datetime import date
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich import box

console = Console()

_DATE = click.DateTime(formats=["%Y-%m-%d"])


def _setup_logging(verbose: bool) -> None:
    """Bei --verbose: Debug-Ausgaben der Kernmodule über Rich."""
    from rich.logging import RichHandler
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _manager(ctx: click.Context):
    from config.manager import ConfigManager
    return ConfigManager(ctx.obj.get("config_path"))


def _load_config_or_abort(ctx: click.Context, required: bool = True):
    """Lädt die Konfiguration oder bricht mit Fehlermeldung ab.

    Mit required=False wird ohne Konfigurationsdatei die Default-Config genutzt.
    """
    mgr = _manager(ctx)
    if mgr.first_run_check() and required:
        console.print(
            "[red]Keine Konfiguration gefunden.[/red]\n"
            "Führen Sie zunächst [bold]mensaplan setup[/bold] aus."
        )
        sys.exit(1)
    try:
        return mgr, mgr.load_or_default()
    except ValueError as e:
        console.print(f"[red bold]Konfiguration fehlerhaft:[/red bold]\n{e}")
        sys.exit(1)


def _export_path(name: str, config) -> Path:
    """Reiner Dateiname landet im Exportverzeichnis der Config, Pfade bleiben."""
    path = Path(name)
    if path.parent == Path(".") and not name.startswith("."):
        return Path(config.reports.output_dir) / path
    return path


def _load_data_or_abort(json_path: Optional[str], config):
    """Lädt den Datensatz (Default: data_path aus der Config)."""
    from models.cafeteria_data import CafeteriaData, CafeteriaDataError

    path = Path(json_path) if json_path else config.data_file
    try:
        return CafeteriaData.load_json(path)
    except FileNotFoundError as e:
        console.print(
            f"[red]{e}[/red]\n"
            "Verwenden Sie [bold]mensaplan generate[/bold] für einen Demo-Datensatz."
        )
        sys.exit(1)
    except CafeteriaDataError as e:
        console.print(f"[red bold]Datensatz fehlerhaft:[/red bold]\n{e}")
        sys.exit(1)


# ─── SETUP ────────────────────────────────────────────────────────────────────

@click.command("setup")
@click.option("--defaults", is_flag=True, default=False,
              help="Default-Konfiguration ohne Wizard schreiben.")
@click.pass_context
def cmd_setup(ctx: click.Context, defaults: bool):
    """Ersteinrichtung: Konfiguration anlegen."""
    from config.defaults import default_cafeteria_config
    from config.wizard import run_wizard

    mgr = _manager(ctx)
    if not mgr.first_run_check() and not defaults:
        console.print(
            "[yellow]Eine Konfiguration existiert bereits.[/yellow]\n"
            "Verwenden Sie [bold]mensaplan config edit[/bold] zum Bearbeiten."
        )
        if not click.confirm("Trotzdem neu einrichten?", default=False):
            return

    config = default_cafeteria_config() if defaults else run_wizard()
    if config is not None:
        mgr.save(config)
        console.print("[bold green]Einrichtung abgeschlossen![/bold green]")
        console.print("Führen Sie jetzt [bold]mensaplan generate[/bold] aus.")


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anzeigen oder bearbeiten."""


@cmd_config.command("show")
@click.pass_context
def config_show(ctx: click.Context):
    """Zeigt die aktuelle Konfiguration an."""
    mgr, config = _load_config_or_abort(ctx)
    console.print(Panel(
        f"[bold]{escape(config.school_name)}[/bold]  |  Datensatz: {escape(str(config.data_path))}",
        title="Mensa-Konfiguration",
        border_style="cyan",
    ))
    mgr.show(config)


@cmd_config.command("edit")
@click.pass_context
def config_edit(ctx: click.Context):
    """Bearbeitet die Konfiguration interaktiv."""
    mgr, config = _load_config_or_abort(ctx)
    mgr.edit_interactive(config)


# ─── GENERATE ─────────────────────────────────────────────────────────────────

@click.command("generate")
@click.option("--seed", default=42, help="Zufalls-Seed für reproduzierbare Daten.")
@click.option("--json-path", default=None,
              help="Pfad für den Datensatz (Default: data_path der Config).")
@click.option("--week-of", type=_DATE, default=None,
              help="Ein Tag der Bestellwoche (Default: nächste Woche).")
@click.option("--validate/--no-validate", "run_validate", default=True,
              help="Konsistenz-Check nach Generierung.")
@click.pass_context
def cmd_generate(ctx: click.Context, seed: int, json_path: Optional[str],
                 week_of, run_validate: bool):
    """Erzeugt einen Demo-Datensatz (Verzeichnis, Mittagszeiten, Bestellungen)."""
    mgr, config = _load_config_or_abort(ctx, required=False)
    from data.fake_data import FakeDataGenerator

    console.print("[bold]Demo-Daten werden generiert...[/bold]")
    gen = FakeDataGenerator(config, seed=seed, week_of=week_of.date() if week_of else None)
    data = gen.generate()
    gen.print_summary(data)

    console.print(f"\n[dim]{data.summary()}[/dim]")

    if run_validate:
        data.validate_consistency().print_rich()

    out_path = Path(json_path) if json_path else config.data_file
    data.save_json(out_path)
    console.print(f"[green]✓[/green] JSON gespeichert: {out_path}")


# ─── CHECK ────────────────────────────────────────────────────────────────────

@click.command("check")
@click.option("--json-path", default=None, help="Pfad zum Datensatz.")
@click.pass_context
def cmd_check(ctx: click.Context, json_path: Optional[str]):
    """Konsistenz-Check auf dem gespeicherten Datensatz (Exit 1 bei Fehlern)."""
    mgr, config = _load_config_or_abort(ctx, required=False)
    data = _load_data_or_abort(json_path, config)

    console.print(f"\n{data.summary()}\n")
    report = data.validate_consistency()
    report.print_rich()

    sys.exit(0 if report.is_consistent else 1)


# ─── WINDOW ───────────────────────────────────────────────────────────────────

@click.command("window")
@click.argument("dates", nargs=-1, required=True, type=_DATE)
@click.pass_context
def cmd_window(ctx: click.Context, dates):
    """Zeigt die Bestellfenster für Ausgabetage (JJJJ-MM-TT)."""
    mgr, config = _load_config_or_abort(ctx, required=False)
    from scheduling.order_window import schedule_windows
    from export.tui_renderer import render_window_rows

    ow = config.ordering_window
    windows = schedule_windows([d.date() for d in dates], ow.start, ow.end)

    table = Table(title="Bestellfenster", box=box.ROUNDED)
    table.add_column("Ausgabetag", style="bold")
    table.add_column("Start")
    table.add_column("Ende")
    table.add_column("Status")
    for row in render_window_rows(windows):
        table.add_row(*row)
    console.print(table)
    console.print(f"[dim]Start: {ow.start.describe()} | Ende: {ow.end.describe()}[/dim]")


# ─── LUNCHTIMES ───────────────────────────────────────────────────────────────

@click.command("lunchtimes")
@click.option("--json-path", default=None, help="Pfad zum Datensatz.")
@click.option("--only-undetermined", is_flag=True, default=False,
              help="Nur Schüler mit mindestens einem unbestimmten Tag.")
@click.pass_context
def cmd_lunchtimes(ctx: click.Context, json_path: Optional[str], only_undetermined: bool):
    """Mittagszeiten Mo–Fr pro Schüler; unbestimmte Tage rot."""
    mgr, config = _load_config_or_abort(ctx, required=False)
    data = _load_data_or_abort(json_path, config)
    from export.tui_renderer import render_lunchtime_rows
    from models.grade import SCHOOL_DAYS

    rows = render_lunchtime_rows(data, only_undetermined=only_undetermined)
    table = Table(title=escape(f"Mittagszeiten {data.lunch_config.name}".strip()), box=box.ROUNDED)
    table.add_column("Schüler", style="bold")
    for day in SCHOOL_DAYS:
        table.add_column(day.short_name, justify="center")
    for row in rows:
        table.add_row(*row)
    console.print(table)
    console.print(f"[dim]{len(rows)} Schüler[/dim]")


# ─── REPORT ───────────────────────────────────────────────────────────────────

@click.command("report")
@click.argument("service_date", type=_DATE)
@click.option("--teacher", "teacher_id", type=int, default=None,
              help="Nur die Klasse dieser Lehrkraft (Benutzer-ID).")
@click.option("--export-xlsx", default=None,
              help="Bericht zusätzlich als Excel speichern (Dateiname: im Exportverzeichnis).")
@click.option("--json-path", default=None, help="Pfad zum Datensatz.")
@click.pass_context
def cmd_report(ctx: click.Context, service_date, teacher_id: Optional[int],
               export_xlsx: Optional[str], json_path: Optional[str]):
    """Ausgabebericht eines Tages, gruppiert nach Klasse, Jahrgang und Personal."""
    mgr, config = _load_config_or_abort(ctx, required=False)
    data = _load_data_or_abort(json_path, config)
    from reports.service_report import build_classroom_report, build_service_report
    from export.helpers import RICH_STYLES, group_heading
    from export.tui_renderer import render_group_rows

    day: date = service_date.date()
    if teacher_id is not None:
        groups = build_classroom_report(
            day, teacher_id, data.roster, data.lunch_config, data.orders)
    else:
        groups = build_service_report(
            day, data.roster, data.lunch_config, data.orders,
            other_title=config.reports.other_title,
            staff_title=config.reports.staff_title,
        )

    if not groups:
        console.print("[dim]Keine Mahlzeiten an diesem Tag.[/dim]")
    for group in groups:
        table = Table(
            title=escape(group_heading(group.title, group.time, day)),
            box=box.ROUNDED,
            title_style=f"bold {RICH_STYLES[group.kind]}",
        )
        table.add_column("Name", style="bold")
        table.add_column("Mahlzeit")
        for row in render_group_rows(group):
            table.add_row(*row)
        console.print(table)

    if export_xlsx:
        from export.excel_export import ReportExcelExporter
        from reports.kitchen_summary import build_kitchen_summary

        kitchen = None
        if teacher_id is None:
            kitchen = build_kitchen_summary(day, data.roster, data.lunch_config, data.orders)
        out = ReportExcelExporter(groups, day, data.school_name or config.school_name,
                                  kitchen=kitchen).export(_export_path(export_xlsx, config))
        console.print(f"[green]✓[/green] Excel gespeichert: {out}")


# ─── KITCHEN ──────────────────────────────────────────────────────────────────

@click.command("kitchen")
@click.argument("service_date", type=_DATE)
@click.option("--json-path", default=None, help="Pfad zum Datensatz.")
@click.pass_context
def cmd_kitchen(ctx: click.Context, service_date, json_path: Optional[str]):
    """Küchenübersicht: Mengen pro schulweiter Ausgabezeit."""
    mgr, config = _load_config_or_abort(ctx, required=False)
    data = _load_data_or_abort(json_path, config)
    from reports.kitchen_summary import build_kitchen_summary
    from export.helpers import format_service_date
    from export.tui_renderer import render_kitchen_rows

    day: date = service_date.date()
    kitchen = build_kitchen_summary(day, data.roster, data.lunch_config, data.orders)

    table = Table(title=f"Küche – {format_service_date(day)}", box=box.ROUNDED)
    table.add_column("Position", style="bold")
    for slot in kitchen.slots:
        table.add_column(slot.time, justify="right")
    table.add_column("ohne Zeit", justify="right", style="red")
    table.add_column("Gesamt", justify="right", style="bold")
    for row in render_kitchen_rows(kitchen):
        table.add_row(*row)
    console.print(table)


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("--config", "config_path", default=None,
              type=click.Path(dir_okay=False, path_type=Path),
              help="Pfad zur Konfigurationsdatei.")
@click.option("--verbose", "-v", is_flag=True, default=False,
              help="Debug-Ausgaben anzeigen.")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], verbose: bool):
    """Mensaplan: Bestellfenster, Mittagszeiten und Ausgabeberichte.

    Starten Sie mit: mensaplan setup
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    _setup_logging(verbose)


def main():
    """Einstiegspunkt. Startet automatisch den Wizard beim ersten Aufruf."""
    from config.manager import ConfigManager
    mgr = ConfigManager()

    if len(sys.argv) == 1 and mgr.first_run_check():
        console.print(Panel(
            "[bold]Willkommen beim Mensaplan![/bold]\n\n"
            "Keine Konfiguration gefunden.\n"
            "Der Setup-Wizard wird jetzt gestartet...",
            border_style="cyan",
        ))
        sys.argv.append("setup")

    cli(obj={})


# Befehle registrieren
cli.add_command(cmd_setup)
cli.add_command(cmd_config)
cli.add_command(cmd_generate)
cli.add_command(cmd_check)
cli.add_command(cmd_window)
cli.add_command(cmd_lunchtimes)
cli.add_command(cmd_report)
cli.add_command(cmd_kitchen)


if __name__ == "__main__":
    main()
