"""
Milestone engine tests.

Pure functions only; no AWS and no fakes needed.

Run with: pytest tests/unit/test_milestone_service.py -v
"""

from datetime import date, timedelta

import pytest

from fakes import make_customer
from models.milestone import Milestone, OverdueAlert, StaffTask
from models.staff import Role
from services import milestone_service

TODAY = date(2025, 3, 13)


def _on(day: date, **kwargs):
    """Customer whose event falls on ``day``."""
    return make_customer(day=day.day, month=day.month - 1, **kwargs)


class TestEvaluateCustomer:
    def test_all_done_yields_nothing(self):
        customer = make_customer(messaged=True, called=True, greeted=True, followed_up=True)
        for offset in range(-10, 10):
            today = TODAY + timedelta(days=offset)
            assert milestone_service.evaluate_customer(customer, today, Role.STAFF) == []
            assert milestone_service.evaluate_customer(customer, today, Role.ADMIN) == []

    def test_event_today_staff_sees_greet_not_overdue(self):
        customer = _on(TODAY, messaged=True, called=True)
        tasks = milestone_service.evaluate_customer(customer, TODAY, Role.STAFF)

        assert [t.milestone for t in tasks] == [Milestone.GREET]
        assert tasks[0].is_overdue is False
        assert tasks[0].target_date == TODAY

    def test_event_today_admin_has_no_greet_alert(self):
        customer = _on(TODAY, messaged=True, called=True)
        assert milestone_service.evaluate_customer(customer, TODAY, Role.ADMIN) == []

    def test_event_yesterday_greet_is_overdue_in_both_views(self):
        customer = _on(TODAY - timedelta(days=1), messaged=True, called=True)

        tasks = milestone_service.evaluate_customer(customer, TODAY, Role.STAFF)
        assert [t.milestone for t in tasks] == [Milestone.GREET]
        assert tasks[0].is_overdue is True

        alerts = milestone_service.evaluate_customer(customer, TODAY, Role.ADMIN)
        assert [a.milestone for a in alerts] == [Milestone.GREET]
        assert alerts[0].days_late == 1

    def test_march_example_days_late(self):
        customer = make_customer(day=10, month=2)
        alerts = milestone_service.evaluate_customer(customer, TODAY, Role.ADMIN)

        assert [(a.milestone, a.days_late) for a in alerts] == [
            (Milestone.MESSAGE, 10),
            (Milestone.CALL, 6),
            (Milestone.GREET, 3),
            (Milestone.FOLLOWUP, 1),
        ]
        assert alerts[1].target_date == date(2025, 3, 7)

    def test_completed_call_is_skipped(self):
        customer = make_customer(day=10, month=2, called=True)
        alerts = milestone_service.evaluate_customer(customer, TODAY, Role.ADMIN)
        assert Milestone.CALL not in [a.milestone for a in alerts]
        assert len(alerts) == 3

    def test_message_due_seven_days_before(self):
        event = TODAY + timedelta(days=7)
        tasks = milestone_service.evaluate_customer(_on(event), TODAY, Role.STAFF)
        assert [(t.milestone, t.is_overdue) for t in tasks] == [(Milestone.MESSAGE, False)]

        earlier = milestone_service.evaluate_customer(_on(event), TODAY - timedelta(days=1), Role.STAFF)
        assert earlier == []

    def test_followup_due_two_days_after(self):
        event = TODAY - timedelta(days=2)
        customer = _on(event, messaged=True, called=True, greeted=True)
        tasks = milestone_service.evaluate_customer(customer, TODAY, Role.STAFF)
        assert [(t.milestone, t.is_overdue) for t in tasks] == [(Milestone.FOLLOWUP, False)]
        assert milestone_service.evaluate_customer(customer, TODAY, Role.ADMIN) == []

    def test_admin_alert_carries_customer_details(self):
        customer = _on(TODAY - timedelta(days=1), messaged=True, called=True, name="Meera")
        alert = milestone_service.evaluate_customer(customer, TODAY, Role.ADMIN)[0]

        assert isinstance(alert, OverdueAlert)
        assert alert.customer_name == "Meera"
        assert alert.staff_name == "ravi"
        assert (alert.day, alert.month) == (customer.day, customer.month)

    def test_days_late_always_positive(self):
        customer = make_customer(day=10, month=2)
        for offset in range(-15, 15):
            today = date(2025, 3, 10) + timedelta(days=offset)
            for alert in milestone_service.evaluate_customer(customer, today, Role.ADMIN):
                assert alert.days_late >= 1


class TestYearRollover:
    def test_december_event_followup_due_in_january(self):
        customer = make_customer(day=31, month=11, messaged=True, called=True, greeted=True)
        tasks = milestone_service.evaluate_customer(customer, date(2026, 1, 2), Role.STAFF)

        assert [t.milestone for t in tasks] == [Milestone.FOLLOWUP]
        assert tasks[0].target_date == date(2026, 1, 2)
        assert tasks[0].is_overdue is False

    def test_december_event_greet_late_in_january(self):
        customer = make_customer(day=31, month=11, messaged=True, called=True)
        alerts = milestone_service.evaluate_customer(customer, date(2026, 1, 1), Role.ADMIN)
        assert [(a.milestone, a.days_late) for a in alerts] == [(Milestone.GREET, 1)]

    def test_january_event_message_due_in_december(self):
        customer = make_customer(day=3, month=0)
        tasks = milestone_service.evaluate_customer(customer, date(2025, 12, 28), Role.STAFF)

        assert [(t.milestone, t.is_overdue) for t in tasks] == [(Milestone.MESSAGE, True)]
        assert tasks[0].target_date == date(2025, 12, 27)


class TestAggregation:
    @pytest.fixture
    def customers(self):
        return [
            make_customer("c1", day=10, month=2, staff_id="s1"),
            make_customer("c2", day=12, month=2, staff_id="s2"),
            make_customer("c3", day=13, month=2, staff_id="s1", messaged=True, called=True),
        ]

    def test_staff_view_only_own_customers(self, customers):
        tasks = milestone_service.evaluate_all(customers, TODAY, Role.STAFF, "s1")

        assert all(isinstance(t, StaffTask) for t in tasks)
        assert {t.customer.id for t in tasks} == {"c1", "c3"}

    def test_staff_view_keeps_customer_then_milestone_order(self, customers):
        tasks = milestone_service.evaluate_all(customers, TODAY, Role.STAFF, "s1")
        assert [(t.customer.id, t.milestone) for t in tasks] == [
            ("c1", Milestone.MESSAGE),
            ("c1", Milestone.CALL),
            ("c1", Milestone.GREET),
            ("c1", Milestone.FOLLOWUP),
            ("c3", Milestone.GREET),
        ]

    def test_admin_view_spans_all_customers(self, customers):
        alerts = milestone_service.evaluate_all(customers, TODAY, Role.ADMIN)

        assert all(isinstance(a, OverdueAlert) for a in alerts)
        assert [a.customer_id for a in alerts] == ["c1"] * 4 + ["c2"] * 3
        # c3's GREET is due today: a staff task, not an admin alert yet.
        assert "c3" not in {a.customer_id for a in alerts}

    def test_staff_view_requires_viewer(self, customers):
        with pytest.raises(ValueError):
            milestone_service.evaluate_all(customers, TODAY, Role.STAFF)

    def test_evaluation_is_repeatable(self, customers):
        first = milestone_service.evaluate_all(customers, TODAY, Role.ADMIN)
        second = milestone_service.evaluate_all(customers, TODAY, Role.ADMIN)
        assert [a.model_dump() for a in first] == [a.model_dump() for a in second]

        staff_first = milestone_service.evaluate_all(customers, TODAY, Role.STAFF, "s1")
        staff_second = milestone_service.evaluate_all(customers, TODAY, Role.STAFF, "s1")
        assert [t.model_dump() for t in staff_first] == [t.model_dump() for t in staff_second]

    def test_milestone_target(self):
        customer = make_customer(day=10, month=2)
        assert milestone_service.milestone_target(customer, Milestone.FOLLOWUP, TODAY) == date(
            2025, 3, 12
        )


class TestMidYear:
    def test_december_event_in_june_has_no_alerts(self):
        customer = make_customer(day=31, month=11)
        assert milestone_service.evaluate_customer(customer, date(2025, 6, 15), Role.ADMIN) == []
        assert milestone_service.evaluate_customer(customer, date(2025, 6, 15), Role.STAFF) == []

    def test_missed_july_event_still_overdue_at_year_end(self):
        customer = make_customer(day=1, month=6)
        alerts = milestone_service.evaluate_customer(customer, date(2025, 12, 31), Role.ADMIN)

        assert [a.milestone for a in alerts] == list(Milestone)
        assert alerts[2].target_date == date(2025, 7, 1)
        assert alerts[2].days_late == 183

    def test_january_event_in_june_uses_this_years_date(self):
        customer = make_customer(day=1, month=0, messaged=True, called=True, greeted=True)
        target = milestone_service.milestone_target(customer, Milestone.FOLLOWUP, date(2025, 6, 15))
        assert target == date(2025, 1, 3)
