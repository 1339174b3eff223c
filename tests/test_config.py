"""Tests für das Konfigurationssystem."""

from datetime import date, datetime
from pathlib import Path

import pytest
from pydantic import ValidationError

from config.schema import (
    CafeteriaConfig,
    OrderingWindowConfig,
    PricingConfig,
    ReportConfig,
)
from config.defaults import (
    DEFAULT_CLASSROOM_GRADES,
    DEFAULT_GRADE_TIMES,
    DEFAULT_MENU_ITEMS,
    DEFAULT_SCHOOL_TIMES,
    default_cafeteria_config,
    default_ordering_window,
)
from config.manager import ConfigManager
from models.grade import SCHOOL_DAYS
from models.time_rule import Anchor, PeriodUnit, RelativeTimeRule


# ─── DEFAULT-KONFIGURATION ────────────────────────────────────────────────────

class TestDefaultConfig:
    def test_default_ordering_window(self):
        """Start 2 Wochen vor der Ausgabewoche, Ende 1 Tag vorher um 10:00."""
        ow = default_ordering_window()
        assert ow.start.count == 2
        assert ow.start.unit == PeriodUnit.WEEKS
        assert ow.start.anchor == Anchor.WEEK_OF_SERVICE
        assert ow.end.clock_time == "10:00"

    def test_default_window_matches_schema_default(self):
        """Die Schema-Defaults und default_ordering_window() stimmen überein."""
        assert OrderingWindowConfig() == default_ordering_window()

    def test_resolve_example(self):
        """Ausgabetag Mi 15.01.2025 → Mo 30.12. 00:00 bis Di 14.01. 10:00."""
        w = default_ordering_window().resolve(date(2025, 1, 15))
        assert w.order_start == datetime(2024, 12, 30, 0, 0)
        assert w.order_end == datetime(2025, 1, 14, 10, 0)

    def test_default_cafeteria_config(self):
        config = default_cafeteria_config()
        assert config.school_name == "Musterschule"
        assert config.pricing.meal_price == 4.50
        assert config.reports.staff_title == "Staff Lunches"
        assert config.data_file == Path("output/cafeteria_data.json")

    def test_default_school_times_cover_school_days(self):
        assert set(DEFAULT_SCHOOL_TIMES) == set(SCHOOL_DAYS)

    def test_default_grade_times_in_pool(self):
        """Jahrgangs-Standardzeiten liegen im schulweiten Pool."""
        pool = set(DEFAULT_SCHOOL_TIMES[SCHOOL_DAYS[0]])
        assert set(DEFAULT_GRADE_TIMES.values()) <= pool

    def test_classroom_grades_have_no_grade_times(self):
        assert not set(DEFAULT_CLASSROOM_GRADES) & set(DEFAULT_GRADE_TIMES)

    def test_menu_items_unique(self):
        names = [n.casefold() for n, _ in DEFAULT_MENU_ITEMS]
        assert len(names) == len(set(names))


# ─── VALIDIERUNG ──────────────────────────────────────────────────────────────

class TestValidation:
    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            PricingConfig(meal_price=-1.0)

    def test_empty_title_rejected(self):
        with pytest.raises(ValidationError):
            ReportConfig(other_title="  ")

    def test_invalid_rule_rejected(self):
        with pytest.raises(ValidationError):
            OrderingWindowConfig(start={"count": 1, "clock_time": "25:00"})

    def test_rule_from_dict(self):
        """Regeln lassen sich aus YAML-artigen Dicts erzeugen."""
        ow = OrderingWindowConfig(
            start={"count": 7, "unit": "days", "anchor": "day_of_service", "clock_time": "08:00"},
        )
        assert ow.start == RelativeTimeRule(count=7, clock_time="08:00")


# ─── CONFIG-MANAGER ───────────────────────────────────────────────────────────

class TestConfigManager:
    def test_save_and_load_roundtrip(self, tmp_path: Path):
        """Gespeicherte Config lässt sich identisch wieder laden."""
        path = tmp_path / "config" / "cafeteria_config.yaml"
        manager = ConfigManager(path)
        config = default_cafeteria_config().model_copy(update={"school_name": "Testschule"})
        manager.save(config)
        loaded = manager.load()
        assert loaded == config

    def test_yaml_contains_comments(self, tmp_path: Path):
        """Abschnittskommentare und Regelbeschreibungen stehen in der Datei."""
        path = tmp_path / "cfg.yaml"
        ConfigManager(path).save(default_cafeteria_config())
        text = path.read_text(encoding="utf-8")
        assert "Mensaplan" in text
        assert "Bestellfenster" in text
        assert "2 week(s) prior to week of meal @00:00" in text

    def test_first_run_check(self, tmp_path: Path):
        manager = ConfigManager(tmp_path / "cfg.yaml")
        assert manager.first_run_check()
        manager.save(default_cafeteria_config())
        assert not manager.first_run_check()

    def test_load_missing_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            ConfigManager(tmp_path / "fehlt.yaml").load()

    def test_load_or_default_without_file(self, tmp_path: Path):
        config = ConfigManager(tmp_path / "fehlt.yaml").load_or_default()
        assert config == default_cafeteria_config()

    def test_invalid_yaml_raises_value_error(self, tmp_path: Path):
        path = tmp_path / "cfg.yaml"
        path.write_text("pricing:\n  meal_price: -3\n", encoding="utf-8")
        with pytest.raises(ValueError):
            ConfigManager(path).load()

    def test_partial_yaml_uses_defaults(self, tmp_path: Path):
        """Fehlende Abschnitte werden mit Defaults aufgefüllt."""
        path = tmp_path / "cfg.yaml"
        path.write_text("school_name: Nordschule\n", encoding="utf-8")
        config = ConfigManager(path).load()
        assert config.school_name == "Nordschule"
        assert config.ordering_window == default_ordering_window()

    def test_load_explicit_path(self, tmp_path: Path):
        path = tmp_path / "andere.yaml"
        ConfigManager(tmp_path / "x.yaml").save(CafeteriaConfig(school_name="A"), path)
        assert ConfigManager(tmp_path / "x.yaml").load(path).school_name == "A"
