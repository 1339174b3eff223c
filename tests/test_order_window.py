"""Tests für die Bestellfenster-Berechnung."""

from datetime import date, datetime

import pytest
from pydantic import ValidationError

from models.time_rule import (
    MAX_OFFSET_DAYS,
    Anchor,
    MealServiceWindow,
    PeriodUnit,
    RelativeTimeRule,
)
from scheduling.order_window import (
    anchor_date,
    resolve_instant,
    resolve_window,
    schedule_windows,
    week_start,
)

WED = date(2025, 1, 15)
MON = date(2025, 1, 13)


def _rule(count, unit=PeriodUnit.DAYS, anchor=Anchor.DAY_OF_SERVICE, clock="00:00"):
    return RelativeTimeRule(count=count, unit=unit, anchor=anchor, clock_time=clock)


# ─── Anker ────────────────────────────────────────────────────────────────────

class TestAnchor:

    def test_week_start_is_monday(self):
        """Jeder Tag der Woche liefert denselben Montag."""
        for offset in range(7):
            assert week_start(date(2025, 1, 13 + offset)) == MON

    def test_week_start_sunday_belongs_to_previous_week(self):
        """Sonntag gehört zur Woche des vorherigen Montags."""
        assert week_start(date(2025, 1, 12)) == date(2025, 1, 6)

    def test_anchor_day_of_service(self):
        assert anchor_date(WED, Anchor.DAY_OF_SERVICE) == WED

    def test_anchor_week_of_service(self):
        assert anchor_date(WED, Anchor.WEEK_OF_SERVICE) == MON


# ─── Einzelne Regel ───────────────────────────────────────────────────────────

class TestResolveInstant:

    def test_two_weeks_before_week_of_service(self):
        """2 Wochen vor der Ausgabewoche um 08:00 → Montag zwei Wochen vorher."""
        rule = _rule(2, PeriodUnit.WEEKS, Anchor.WEEK_OF_SERVICE, "08:00")
        assert resolve_instant(WED, rule) == datetime(2024, 12, 30, 8, 0)

    def test_one_day_before_service(self):
        rule = _rule(1, clock="10:00")
        assert resolve_instant(WED, rule) == datetime(2025, 1, 14, 10, 0)

    def test_zero_count_is_anchor_itself(self):
        """count=0 → Zeitpunkt am Anker selbst."""
        rule = _rule(0, clock="07:30")
        assert resolve_instant(WED, rule) == datetime(2025, 1, 15, 7, 30)

    def test_one_week_equals_seven_days(self):
        """1 Woche ist gleichwertig mit 7 Tagen, für beide Anker."""
        for anchor in Anchor:
            weeks = _rule(1, PeriodUnit.WEEKS, anchor, "09:15")
            days = _rule(7, PeriodUnit.DAYS, anchor, "09:15")
            assert resolve_instant(WED, weeks) == resolve_instant(WED, days)

    def test_crosses_month_boundary(self):
        rule = _rule(3, clock="12:00")
        assert resolve_instant(date(2025, 3, 1), rule) == datetime(2025, 2, 26, 12, 0)


# ─── Regel-Validierung ────────────────────────────────────────────────────────

class TestRuleValidation:

    def test_negative_count_rejected(self):
        with pytest.raises(ValidationError):
            _rule(-1)

    @pytest.mark.parametrize("clock", ["24:00", "8:00", "12:60", "abc"])
    def test_invalid_clock_time_rejected(self, clock):
        with pytest.raises(ValidationError):
            _rule(1, clock=clock)

    @pytest.mark.parametrize("count, unit", [
        (10**6, PeriodUnit.WEEKS),
        (MAX_OFFSET_DAYS + 1, PeriodUnit.DAYS),
        (MAX_OFFSET_DAYS // 7 + 1, PeriodUnit.WEEKS),
    ])
    def test_oversized_offset_rejected(self, count, unit):
        """Zu große Versätze scheitern bei der Validierung, nicht erst beim Rechnen."""
        with pytest.raises(ValidationError):
            _rule(count, unit)

    def test_largest_offset_still_resolves(self):
        rule = _rule(MAX_OFFSET_DAYS // 7, PeriodUnit.WEEKS)
        assert resolve_instant(WED, rule) < datetime(2016, 1, 1)
        assert resolve_instant(WED, _rule(MAX_OFFSET_DAYS)) < datetime(2016, 1, 1)

    def test_rule_is_frozen(self):
        rule = _rule(1)
        with pytest.raises(ValidationError):
            rule.count = 5

    def test_describe(self):
        rule = _rule(2, PeriodUnit.WEEKS, Anchor.WEEK_OF_SERVICE, "08:00")
        assert rule.describe() == "2 week(s) prior to week of meal @08:00"


# ─── Fenster ──────────────────────────────────────────────────────────────────

class TestResolveWindow:

    @pytest.fixture
    def window(self) -> MealServiceWindow:
        return resolve_window(
            WED,
            _rule(2, PeriodUnit.WEEKS, Anchor.WEEK_OF_SERVICE, "08:00"),
            _rule(1, clock="10:00"),
        )

    def test_start_and_end(self, window):
        assert window.service_date == WED
        assert window.order_start == datetime(2024, 12, 30, 8, 0)
        assert window.order_end == datetime(2025, 1, 14, 10, 0)
        assert window.is_open

    def test_half_open_interval(self, window):
        """Start gehört zum Fenster, Ende nicht."""
        assert window.accepts_orders_at(datetime(2024, 12, 30, 8, 0))
        assert window.accepts_orders_at(datetime(2025, 1, 14, 9, 59))
        assert not window.accepts_orders_at(datetime(2025, 1, 14, 10, 0))
        assert not window.accepts_orders_at(datetime(2024, 12, 30, 7, 59))

    def test_will_accept_orders(self, window):
        """Vor dem Start: noch nicht offen, aber künftig bestellbar."""
        early = datetime(2024, 12, 1, 12, 0)
        assert not window.accepts_orders_at(early)
        assert window.will_accept_orders(early)
        assert not window.will_accept_orders(datetime(2025, 1, 14, 10, 0))

    def test_degenerate_window_never_accepts(self):
        """Ende vor Start ist kein Fehler, das Fenster nimmt nur nie Bestellungen an."""
        w = resolve_window(WED, _rule(0, clock="10:00"), _rule(1, clock="10:00"))
        assert w.order_end < w.order_start
        assert not w.is_open
        assert not w.accepts_orders_at(datetime(2025, 1, 14, 12, 0))
        assert not w.will_accept_orders(datetime(2024, 1, 1, 0, 0))

    def test_equal_start_and_end_is_closed(self):
        w = resolve_window(WED, _rule(1, clock="10:00"), _rule(1, clock="10:00"))
        assert not w.is_open

    def test_describe(self, window):
        assert window.describe() == "Mon 12/30 @08:00 - Tue 01/14 @10:00"

    def test_deterministic(self):
        """Gleiche Regeln und gleicher Tag liefern dasselbe Fenster."""
        start = _rule(2, PeriodUnit.WEEKS, Anchor.WEEK_OF_SERVICE, "08:00")
        end = _rule(1, clock="10:00")
        assert resolve_window(WED, start, end) == resolve_window(WED, start, end)
        assert schedule_windows([WED, MON], start, end) == schedule_windows([MON, WED], start, end)


class TestScheduleWindows:

    def test_sorted_and_deduplicated(self):
        dates = [date(2025, 1, 17), WED, date(2025, 1, 13), WED]
        windows = schedule_windows(dates, _rule(7), _rule(1))
        assert [w.service_date for w in windows] == [
            date(2025, 1, 13), date(2025, 1, 15), date(2025, 1, 17),
        ]

    def test_week_anchor_shares_start_within_week(self):
        """Alle Tage einer Woche haben denselben Start bei WEEK_OF_SERVICE."""
        start = _rule(1, PeriodUnit.WEEKS, Anchor.WEEK_OF_SERVICE, "08:00")
        windows = schedule_windows(
            [date(2025, 1, 13 + i) for i in range(5)], start, _rule(1, clock="10:00")
        )
        assert len({w.order_start for w in windows}) == 1
        assert len({w.order_end for w in windows}) == 5

    def test_empty_input(self):
        assert schedule_windows([], _rule(1), _rule(0)) == []
