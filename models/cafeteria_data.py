"""CafeteriaData: Datensatz eines Schuljahres + Konsistenz-Check (Pydantic v2)."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ValidationError

from models.grade import Weekday
from models.lunch_config import SchoolYearLunchConfig
from models.order import Order
from models.roster import Roster


class CafeteriaDataError(Exception):
    """Fehler beim Laden eines Datensatzes."""


class ConsistencyReport(BaseModel):
    """Ergebnis des Konsistenz-Checks."""

    is_consistent: bool
    errors: list[str]      # Fehlerhafte Verweise, doppelte Zuordnungen
    warnings: list[str]    # Lücken in der Konfiguration (unbestimmte Zeiten u.ä.)

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.markup import escape

        console = Console()
        if self.is_consistent:
            status = "[bold green]✓ KONSISTENT[/bold green]"
        else:
            status = "[bold red]✗ FEHLERHAFT[/bold red]"

        lines = [status]
        if self.errors:
            lines.append("\n[red bold]Fehler:[/red bold]")
            for e in self.errors:
                lines.append(f"  [red]• {escape(e)}[/red]")
        if self.warnings:
            lines.append("\n[yellow bold]Warnungen:[/yellow bold]")
            for w in self.warnings:
                lines.append(f"  [yellow]• {escape(w)}[/yellow]")
        if not self.errors and not self.warnings:
            lines.append("[dim]Keine Probleme gefunden.[/dim]")

        console.print(Panel("\n".join(lines), title="Konsistenz-Check", border_style="cyan"))


class CafeteriaData(BaseModel):
    """Mittagszeiten-Konfiguration, Schülerverzeichnis und Bestellungen."""

    school_name: str = ""
    lunch_config: SchoolYearLunchConfig
    roster: Roster
    orders: list[Order] = []
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
    data_version: str = "1.0"

    # ─── Übersicht ───

    def summary(self) -> str:
        """Kurze Übersicht über den Datensatz."""
        meals = [m for o in self.orders for m in o.meals]
        dates = sorted({m.date for m in meals})
        cfg = self.lunch_config
        lines = [
            f"Schule: {self.school_name}" if self.school_name else "",
            f"Schuljahr: {cfg.name}" if cfg.name else "",
            f"Schüler: {len(self.roster.students)}",
            f"Lehrkräfte: {len(self.roster.teachers)} "
            f"(Benutzer gesamt: {len(self.roster.users)})",
            f"Klassenweise Jahrgänge: "
            f"{', '.join(g.display_name for g in cfg.grades_by_classroom) or '–'}",
            f"Zuordnungen: {len(cfg.student_assignments)}",
            f"Bestellungen: {len(self.orders)} ({len(meals)} Mahlzeiten)",
            f"Ausgabetage: {dates[0]} – {dates[-1]}" if dates else "",
        ]
        return "\n".join(l for l in lines if l)

    # ─── Konsistenz-Check ───

    def validate_consistency(self) -> ConsistencyReport:
        """Prüft Verweise und Lücken der Konfiguration.

        Fehler:
        1. Zuordnungen mit unbekanntem Schüler oder unbekannter Lehrkraft
        2. Lehrerzeiten einer unbekannten Lehrkraft
        3. Mahlzeiten mit unbekanntem Esser
        4. Mehrere Zuordnungen für denselben Schüler am selben Tag

        Warnungen:
        5. Jahrgangs-/Lehrerzeiten außerhalb des schulweiten Pools
        6. Jahrgangszeiten klassenweise zugeordneter Jahrgänge (werden nie genutzt)
        7. Klassenweise Zuordnungen ohne Lehrkraft
        8. Schüler mit unbestimmter Mittagszeit an einem Schultag
        """
        from scheduling.lunchtime import find_undetermined

        errors: list[str] = []
        warnings: list[str] = []
        cfg = self.lunch_config
        student_ids = {s.id for s in self.roster.students}
        user_ids = {u.id for u in self.roster.users}
        teacher_ids = set(self.roster.teacher_directory())

        # ── 1. Zuordnungen ───────────────────────────────────────────────
        for a in cfg.student_assignments:
            if a.student_id not in student_ids:
                errors.append(
                    f"Zuordnung {a.day.short_name}: Schüler {a.student_id} unbekannt."
                )
            if a.teacher_id is not None and a.teacher_id not in teacher_ids:
                errors.append(
                    f"Zuordnung {self.roster.student_name(a.student_id)} "
                    f"({a.day.short_name}): Lehrkraft {a.teacher_id} nicht im Verzeichnis."
                )

        # ── 2. Lehrerzeiten ──────────────────────────────────────────────
        for r in cfg.teacher_times:
            if r.teacher_id not in teacher_ids:
                errors.append(
                    f"Lehrerzeiten {r.day.short_name}: Lehrkraft {r.teacher_id} "
                    f"nicht im Verzeichnis."
                )

        # ── 3. Mahlzeiten ────────────────────────────────────────────────
        for order in self.orders:
            for meal in order.meals:
                if meal.student_id is not None and meal.student_id not in student_ids:
                    errors.append(
                        f"Bestellung {order.id}, Mahlzeit {meal.id}: "
                        f"Schüler {meal.student_id} unbekannt."
                    )
                if meal.staff_member_id is not None and meal.staff_member_id not in user_ids:
                    errors.append(
                        f"Bestellung {order.id}, Mahlzeit {meal.id}: "
                        f"Personal {meal.staff_member_id} unbekannt."
                    )

        # ── 4. Doppelte Zuordnungen ──────────────────────────────────────
        for student_id, day in cfg.duplicate_assignments():
            count = len(cfg.assignments_for(student_id, day))
            errors.append(
                f"{self.roster.student_name(student_id)}: {count} Zuordnungen am "
                f"{day.short_name} – nur die erste wird verwendet."
            )

        # ── 5./6. Zeiten außerhalb des Pools ─────────────────────────────
        for r in cfg.grade_times:
            if cfg.is_classroom_governed(r.grade):
                warnings.append(
                    f"Jahrgang {r.grade.display_name} ({r.day.short_name}): wird "
                    f"klassenweise zugeordnet – Jahrgangszeiten werden ignoriert."
                )
            outside = [t for t in r.times if t not in cfg.school_times_for(r.day)]
            if outside:
                warnings.append(
                    f"Jahrgang {r.grade.display_name} ({r.day.short_name}): "
                    f"{', '.join(outside)} nicht in den schulweiten Zeiten."
                )
        for r in cfg.teacher_times:
            outside = [t for t in r.times if t not in cfg.school_times_for(r.day)]
            if outside:
                warnings.append(
                    f"{self.roster.user_name(r.teacher_id)} ({r.day.short_name}): "
                    f"{', '.join(outside)} nicht in den schulweiten Zeiten."
                )

        # ── 7. Klassenweise ohne Lehrkraft ───────────────────────────────
        for a in cfg.student_assignments:
            if cfg.is_classroom_governed(a.grade) and a.teacher_id is None:
                warnings.append(
                    f"{self.roster.student_name(a.student_id)} ({a.day.short_name}): "
                    f"Jahrgang {a.grade.display_name} klassenweise, aber keine Lehrkraft."
                )

        # ── 8. Unbestimmte Schüler ───────────────────────────────────────
        flagged = sorted(find_undetermined(cfg, student_ids | set(cfg.student_ids)))
        if flagged:
            names = [self.roster.student_name(sid) for sid in flagged]
            warnings.append(
                f"{len(flagged)} Schüler mit unbestimmter Mittagszeit "
                f"({', '.join(names[:6])}{'...' if len(names) > 6 else ''})."
            )

        return ConsistencyReport(
            is_consistent=len(errors) == 0,
            errors=errors,
            warnings=warnings,
        )

    # ─── Persistenz ────────────────────────────────────────────────────────

    def save_json(self, path: Path) -> None:
        """Speichert den kompletten Datensatz als JSON-Datei."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        now = datetime.now(timezone.utc)
        updated = self.model_copy(update={
            "modified_at": now,
            "created_at": self.created_at or now,
        })
        with open(path, "w", encoding="utf-8") as f:
            f.write(updated.model_dump_json(indent=2))

    @classmethod
    def load_json(cls, path: Path) -> "CafeteriaData":
        """Lädt einen Datensatz aus einer JSON-Datei."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"JSON-Datei nicht gefunden: {path}")
        with open(path, "r", encoding="utf-8") as f:
            raw = f.read()
        try:
            return cls.model_validate_json(raw)
        except ValidationError as e:
            raise CafeteriaDataError(f"Datensatz ungültig: {path}\n{e}") from e
