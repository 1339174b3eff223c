"""Tests für den Datensatz: Konsistenz-Check, JSON-Persistenz und Demo-Daten."""

from datetime import date
from pathlib import Path

import pytest

from config.defaults import default_cafeteria_config
from data.fake_data import FakeDataGenerator
from models.cafeteria_data import CafeteriaData, CafeteriaDataError
from models.grade import GradeLevel, Weekday
from models.lunch_config import StudentAssignment
from models.order import Meal, Order
from models.roster import Role

from conftest import make_lunch_config, make_orders, make_roster

MON = Weekday.MONDAY


def _data(lunch_config=None, orders=None) -> CafeteriaData:
    return CafeteriaData(
        school_name="Test-Schule",
        lunch_config=lunch_config or make_lunch_config(),
        roster=make_roster(),
        orders=orders if orders is not None else make_orders(),
    )


# ─── Konsistenz-Check ─────────────────────────────────────────────────────────

class TestConsistency:

    def test_unknown_teacher_is_error(self, mini_data):
        """Lehrkraft 999 in einer Zuordnung ist nicht im Verzeichnis."""
        report = mini_data.validate_consistency()
        assert not report.is_consistent
        assert any("999" in e for e in report.errors)

    def test_clean_data_is_consistent(self):
        cfg = make_lunch_config().replace(student_assignments=[
            {"student_id": 1, "day": MON, "grade": GradeLevel.KINDERGARTEN, "teacher_id": 100},
        ])
        report = _data(cfg).validate_consistency()
        assert report.is_consistent
        assert report.errors == []

    def test_unknown_student_in_assignment(self):
        cfg = make_lunch_config(extra_assignments=[
            StudentAssignment(student_id=42, day=MON, grade=GradeLevel.FIFTH),
        ])
        errors = _data(cfg).validate_consistency().errors
        assert any("Schüler 42 unbekannt" in e for e in errors)

    def test_unknown_teacher_times(self):
        cfg = make_lunch_config().replace(teacher_times=[
            {"teacher_id": 555, "day": MON, "times": ["11:00"]},
        ])
        errors = _data(cfg).validate_consistency().errors
        assert any("Lehrkraft 555" in e for e in errors)

    def test_unknown_eaters(self):
        orders = [Order(id=9, user_id=104, date=date(2025, 1, 6), meals=[
            Meal(id=1, date=date(2025, 1, 13), student_id=77),
            Meal(id=2, date=date(2025, 1, 13), staff_member_id=88),
        ])]
        errors = _data(orders=orders).validate_consistency().errors
        assert any("Schüler 77 unbekannt" in e for e in errors)
        assert any("Personal 88 unbekannt" in e for e in errors)

    def test_duplicate_assignment_is_error(self):
        cfg = make_lunch_config(extra_assignments=[
            StudentAssignment(student_id=2, day=MON, grade=GradeLevel.KINDERGARTEN, teacher_id=100),
        ])
        errors = _data(cfg).validate_consistency().errors
        assert any(e.startswith("ben Baker: 2 Zuordnungen") for e in errors)

    def test_warnings(self, mini_data):
        warnings = mini_data.validate_consistency().warnings
        # Jahrgangszeit für klassenweisen Kindergarten
        assert any("Kind." in w and "ignoriert" in w for w in warnings)
        # Unbestimmte Schüler (alle, da nur Montagszuordnungen)
        assert any(w.startswith("6 Schüler mit unbestimmter Mittagszeit") for w in warnings)

    def test_time_outside_pool_warning(self):
        cfg = make_lunch_config().replace(teacher_times=[
            {"teacher_id": 100, "day": MON, "times": ["11:15"]},
        ])
        warnings = _data(cfg).validate_consistency().warnings
        assert any("Mrs. Smith" in w and "11:15" in w for w in warnings)

    def test_classroom_assignment_without_teacher_warning(self):
        cfg = make_lunch_config(extra_assignments=[
            StudentAssignment(student_id=6, day=MON, grade=GradeLevel.KINDERGARTEN),
        ])
        warnings = _data(cfg).validate_consistency().warnings
        assert any("Finn Fox" in w and "keine Lehrkraft" in w for w in warnings)


# ─── Persistenz ───────────────────────────────────────────────────────────────

class TestJsonPersistence:

    def test_roundtrip(self, mini_data, tmp_path: Path):
        path = tmp_path / "sub" / "data.json"
        mini_data.save_json(path)
        loaded = CafeteriaData.load_json(path)
        assert loaded.school_name == "Test-Schule"
        assert loaded.created_at is not None
        assert loaded.modified_at is not None
        assert loaded.lunch_config.model_dump() == mini_data.lunch_config.model_dump()
        assert loaded.orders == mini_data.orders

    def test_indexes_rebuilt_after_load(self, mini_data, tmp_path: Path):
        """Nach dem Laden funktionieren die Nachschlage-Indizes wieder."""
        path = tmp_path / "data.json"
        mini_data.save_json(path)
        cfg = CafeteriaData.load_json(path).lunch_config
        assert cfg.teacher_times_for(100, MON) == ["11:00", "11:30"]
        assert cfg.assignment_for(3, MON).grade == GradeLevel.FIFTH

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            CafeteriaData.load_json(tmp_path / "fehlt.json")

    def test_invalid_content(self, tmp_path: Path):
        path = tmp_path / "kaputt.json"
        path.write_text('{"school_name": "x"}', encoding="utf-8")
        with pytest.raises(CafeteriaDataError):
            CafeteriaData.load_json(path)

    def test_summary(self, mini_data):
        text = mini_data.summary()
        assert "Schule: Test-Schule" in text
        assert "Schüler: 6" in text
        assert "Bestellungen: 4 (12 Mahlzeiten)" in text


# ─── Demo-Daten ───────────────────────────────────────────────────────────────

class TestFakeData:

    @pytest.fixture(scope="class")
    def demo(self) -> CafeteriaData:
        return FakeDataGenerator(
            default_cafeteria_config(), seed=42, week_of=date(2025, 1, 15)
        ).generate()

    def test_no_consistency_errors(self, demo):
        report = demo.validate_consistency()
        assert report.errors == []
        assert report.is_consistent

    def test_deliberate_gaps_are_warnings(self, demo):
        warnings = demo.validate_consistency().warnings
        assert any("11:15" in w for w in warnings)
        assert any("unbestimmter Mittagszeit" in w for w in warnings)

    def test_meals_in_service_week(self, demo):
        dates = {m.date for o in demo.orders for m in o.meals}
        assert min(dates) >= date(2025, 1, 13)
        assert max(dates) <= date(2025, 1, 17)

    def test_contains_donation(self, demo):
        meals = [m for o in demo.orders for m in o.meals]
        assert any(m.student_id is None and m.staff_member_id is None for m in meals)

    def test_roles(self, demo):
        roles = {u.role for u in demo.roster.users}
        assert {Role.ADMIN, Role.TEACHER, Role.STAFF, Role.PARENT} <= roles

    def test_deterministic_with_seed(self):
        a = FakeDataGenerator(default_cafeteria_config(), seed=7, week_of=date(2025, 1, 13)).generate()
        b = FakeDataGenerator(default_cafeteria_config(), seed=7, week_of=date(2025, 1, 13)).generate()
        assert a.model_dump() == b.model_dump()

    def test_first_teacher_has_no_friday_time(self, demo):
        cfg = demo.lunch_config
        first = min(r.teacher_id for r in cfg.teacher_times)
        assert cfg.teacher_times_for(first, Weekday.FRIDAY) == []
        assert cfg.teacher_times_for(first, Weekday.MONDAY) != []
