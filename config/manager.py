"""Mensa-Konfiguration als kommentierte YAML-Datei (ruamel.yaml).

Laden validiert über das Pydantic-Schema; Speichern schreibt Abschnitts-
kommentare und die Bestellfenster-Regeln lesbar als Zeilenkommentar.
"""

import json
from datetime import date
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich import box
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from config.schema import CafeteriaConfig

console = Console()
yaml = YAML()
yaml.default_flow_style = False
yaml.width = 120


# ─── YAML-KOMMENTAR-AUFBAU ───

_YAML_HEADER = f"""\
# ============================================
# Mensaplan — Konfiguration
# Version: 1.0
# Erstellt: {date.today().isoformat()}
# ============================================
"""

_SECTION_COMMENTS = {
    "ordering_window": (
        "Bestellfenster",
        "count/unit vor anchor (day_of_service | week_of_service = Montag der\n"
        "Ausgabewoche), um clock_time. Ende <= Start heißt: nie bestellbar.",
    ),
    "pricing": (
        "Preise",
        None,
    ),
    "reports": (
        "Ausgabebericht",
        "Titel der Sammelgruppen und Exportverzeichnis.",
    ),
}


class ConfigManager:
    CONFIG_DIR = Path("config")
    DEFAULT_CONFIG = CONFIG_DIR / "cafeteria_config.yaml"

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else self.DEFAULT_CONFIG

    def first_run_check(self) -> bool:
        """True, solange unter self.path noch keine Datei liegt."""
        return not self.path.exists()

    # ─── Laden ───

    def load(self, path: Optional[Path] = None) -> CafeteriaConfig:
        """Liest die YAML-Datei und validiert sie gegen CafeteriaConfig.

        Fehlende Abschnitte werden mit Defaults aufgefüllt.
        """
        target = Path(path) if path else self.path
        if not target.exists():
            raise FileNotFoundError(
                f"Konfigurationsdatei nicht gefunden: {target}\n"
                f"Führen Sie 'mensaplan setup' aus, um die Mensa einzurichten."
            )
        with open(target, "r", encoding="utf-8") as f:
            raw = yaml.load(f)
        try:
            return CafeteriaConfig.model_validate(dict(raw or {}))
        except ValidationError as e:
            raise ValueError(
                f"Konfigurationsdatei ungültig: {target}\n"
                f"Pydantic-Fehler: {e}"
            ) from e

    def load_or_default(self) -> CafeteriaConfig:
        """Wie load(), aber mit Default-Config falls noch keine Datei existiert."""
        if self.first_run_check():
            from config.defaults import default_cafeteria_config
            return default_cafeteria_config()
        return self.load()

    # ─── Speichern ───

    def save(self, config: CafeteriaConfig, path: Optional[Path] = None) -> Path:
        """Speichere Config als YAML mit Kommentaren."""
        target = Path(path) if path else self.path
        target.parent.mkdir(parents=True, exist_ok=True)

        data = self._build_commented_yaml(config)

        with open(target, "w", encoding="utf-8") as f:
            f.write(_YAML_HEADER + "\n")
            yaml.dump(data, f)

        console.print(f"[green]✓[/green] Konfiguration gespeichert: {target}")
        return target

    def _build_commented_yaml(self, config: CafeteriaConfig) -> CommentedMap:
        """CommentedMap mit Abschnittskommentaren und Regelbeschreibungen."""
        raw = json.loads(config.model_dump_json())
        cm = CommentedMap(raw)

        for field, (label, comment) in _SECTION_COMMENTS.items():
            cm.yaml_set_comment_before_after_key(
                field,
                before=f"\n─── {label} ───" + (f"\n{comment}" if comment else ""),
            )

        # Regeln zusätzlich lesbar als Zeilenkommentar
        ow = CommentedMap(cm["ordering_window"])
        ow.yaml_add_eol_comment(config.ordering_window.start.describe(), "start")
        ow.yaml_add_eol_comment(config.ordering_window.end.describe(), "end")
        cm["ordering_window"] = ow

        return cm

    # ─── Anzeige ───

    def show(self, config: CafeteriaConfig) -> None:
        """Gibt die Konfiguration als Tabelle aus."""
        from config.wizard import _show_ordering_window_table
        table = Table(box=box.SIMPLE, title=f"Konfiguration ({self.path})")
        table.add_column("Parameter", style="bold")
        table.add_column("Wert")
        table.add_row("school_name", config.school_name)
        table.add_row("data_path", config.data_path)
        for k, v in config.pricing.model_dump().items():
            table.add_row(f"pricing.{k}", f"{v:.2f}")
        for k, v in config.reports.model_dump().items():
            table.add_row(f"reports.{k}", str(v))
        console.print(table)
        _show_ordering_window_table(config.ordering_window)

    # ─── Interaktives Bearbeiten ───

    def edit_interactive(self, config: CafeteriaConfig) -> CafeteriaConfig:
        """Menü zum Bearbeiten; speichert beim Verlassen über "0"."""
        from config.wizard import _wizard_ordering_window, _wizard_pricing, _wizard_reports

        while True:
            console.print()
            console.print(Panel(
                "[bold]Konfiguration bearbeiten[/bold]",
                border_style="cyan",
            ))
            console.print("  [bold]1.[/bold] Schulname & Datensatz")
            console.print("  [bold]2.[/bold] Bestellfenster")
            console.print("  [bold]3.[/bold] Preise")
            console.print("  [bold]4.[/bold] Berichtstitel")
            console.print("  [bold]0.[/bold] Speichern & Zurück")

            choice = Prompt.ask("\nAuswahl", default="0")

            if choice == "1":
                name = Prompt.ask("Name der Schule", default=config.school_name)
                data_path = Prompt.ask("Pfad zum Datensatz", default=config.data_path)
                config = config.model_copy(
                    update={"school_name": name, "data_path": data_path}
                )
            elif choice == "2":
                config = config.model_copy(
                    update={"ordering_window": _wizard_ordering_window(config.ordering_window)}
                )
            elif choice == "3":
                config = config.model_copy(
                    update={"pricing": _wizard_pricing(config.pricing)}
                )
            elif choice == "4":
                config = config.model_copy(
                    update={"reports": _wizard_reports(config.reports)}
                )
            elif choice == "0":
                self.save(config)
                break
            else:
                console.print("[yellow]Ungültige Auswahl.[/yellow]")

        return config
