"""Tests for the assignment entity and its due-date classification."""

from datetime import date, datetime, time, timedelta, timezone

import pytest

from evermind.core.assignments import (
    Assignment,
    from_document,
    parse_due_time,
    priority_rank,
    to_document,
)


class TestPriorityRank:
    def test_known_priorities_are_ordered(self):
        assert priority_rank("low") < priority_rank("medium") < priority_rank("high")

    def test_unknown_priority_ranks_below_low(self):
        assert priority_rank("urgent") == 0
        assert priority_rank("") == 0
        assert priority_rank("urgent") < priority_rank("low")


class TestIsDueToday:
    def test_due_today(self, make_assignment, now):
        assert make_assignment(due_date=now.date()).is_due_today(now) is True

    def test_independent_of_completion(self, make_assignment, now):
        assert make_assignment(due_date=now.date(), completed=True).is_due_today(now) is True

    def test_due_earlier_today_is_still_today(self, make_assignment, now):
        a = make_assignment(due_date=now.date(), due_time=time(8, 0))
        assert a.is_due_today(now) is True

    def test_tomorrow_is_not_today(self, make_assignment, now):
        a = make_assignment(due_date=now.date() + timedelta(days=1))
        assert a.is_due_today(now) is False


class TestIsOverdue:
    def test_past_due_instant(self, make_assignment, now):
        a = make_assignment(due_date=now.date(), due_time=time(11, 59))
        assert a.is_overdue(now) is True

    def test_exactly_now_is_not_overdue(self, make_assignment, now):
        a = make_assignment(due_date=now.date(), due_time=time(12, 0))
        assert a.is_overdue(now) is False

    def test_completed_is_never_overdue(self, make_assignment, now):
        a = make_assignment(due_date=now.date() - timedelta(days=3), completed=True)
        assert a.is_overdue(now) is False

    def test_future_is_not_overdue(self, make_assignment, now):
        assert make_assignment(due_date=now.date() + timedelta(days=1)).is_overdue(now) is False


class TestIsDueSoon:
    def test_within_24_hours(self, make_assignment, now):
        a = make_assignment(due_date=date(2025, 3, 11), due_time=time(9, 0))
        assert a.is_due_soon(now) is True

    def test_exactly_24_hours_is_soon(self, make_assignment, now):
        a = make_assignment(due_date=date(2025, 3, 11), due_time=time(12, 0))
        assert a.is_due_soon(now) is True

    def test_beyond_24_hours(self, make_assignment, now):
        a = make_assignment(due_date=date(2025, 3, 11), due_time=time(12, 1))
        assert a.is_due_soon(now) is False

    def test_past_is_not_soon(self, make_assignment, now):
        a = make_assignment(due_date=now.date(), due_time=time(11, 0))
        assert a.is_due_soon(now) is False

    def test_completed_is_not_soon(self, make_assignment, now):
        a = make_assignment(due_date=now.date(), due_time=time(18, 0), completed=True)
        assert a.is_due_soon(now) is False

    def test_today_and_soon_are_independent(self, make_assignment, now):
        a = make_assignment(due_date=now.date(), due_time=time(18, 0))
        assert a.is_due_today(now) is True
        assert a.is_due_soon(now) is True


class TestDueClass:
    def test_today_wins_over_soon(self, make_assignment, now):
        a = make_assignment(due_date=now.date(), due_time=time(18, 0))
        assert a.due_class(now) == "due-today"

    def test_soon_tomorrow(self, make_assignment, now):
        a = make_assignment(due_date=date(2025, 3, 11), due_time=time(8, 0))
        assert a.due_class(now) == "due-soon"

    def test_far_future_has_no_class(self, make_assignment, now):
        a = make_assignment(due_date=date(2025, 4, 1))
        assert a.due_class(now) == ""


class TestParseDueTime:
    def test_defaults_to_end_of_day(self):
        assert parse_due_time(None) == time(23, 59)
        assert parse_due_time("") == time(23, 59)
        assert parse_due_time("   ") == time(23, 59)

    def test_parses_hours_and_minutes(self):
        assert parse_due_time("09:30") == time(9, 30)

    def test_ignores_seconds(self):
        assert parse_due_time("09:30:15") == time(9, 30)

    def test_rejects_garbage(self):
        with pytest.raises(ValueError):
            parse_due_time("noon")

    @pytest.mark.parametrize("value", ["12:345", "25:00", "12:", "12:3a"])
    def test_rejects_malformed_clock(self, value):
        with pytest.raises(ValueError):
            parse_due_time(value)


class TestSerialization:
    def test_to_dict_shape(self, make_assignment):
        a = make_assignment(id="abc", title="Essay", due_date=date(2025, 3, 10), due_time=time(9, 5), priority="high")
        data = a.to_dict()
        assert data == {
            "id": "abc",
            "title": "Essay",
            "course": "ENG101",
            "description": "",
            "dueDate": "2025-03-10",
            "dueTime": "09:05",
            "priority": "high",
            "completed": False,
            "createdAt": "2025-03-01T09:00:00+00:00",
        }

    def test_from_dict_browser_record(self):
        a = Assignment.from_dict(
            {
                "id": "1741600000000",
                "title": "Lab report",
                "course": "CHEM200",
                "description": "Section 3",
                "dueDate": "2025-03-12",
                "dueTime": "14:00",
                "priority": "low",
                "completed": True,
                "createdAt": "2025-03-10T10:26:40.000Z",
            }
        )
        assert a.id == "1741600000000"
        assert a.due_at == datetime(2025, 3, 12, 14, 0)
        assert a.completed is True
        assert a.created_at == datetime(2025, 3, 10, 10, 26, 40, tzinfo=timezone.utc)

    def test_from_dict_defaults(self):
        a = Assignment.from_dict(
            {
                "id": "x",
                "title": "Quiz",
                "course": "MATH1",
                "dueDate": "2025-03-12",
                "dueTime": "",
                "createdAt": "2025-03-10T10:00:00",
            }
        )
        assert a.due_time == time(23, 59)
        assert a.description == ""
        assert a.completed is False
        assert a.priority_rank == 0

    @pytest.mark.parametrize("raw", [None, 5, ["high"]])
    def test_from_dict_non_text_priority_ranks_zero(self, raw):
        a = Assignment.from_dict(
            {
                "id": "x",
                "title": "Quiz",
                "course": "MATH1",
                "dueDate": "2025-03-12",
                "priority": raw,
                "createdAt": "2025-03-10T10:00:00",
            }
        )
        assert isinstance(a.priority, str)
        assert a.priority_rank == 0

    def test_document_round_trip_preserves_order(self, make_assignment):
        items = [make_assignment(), make_assignment(), make_assignment()]
        restored = from_document(to_document(items))
        assert [a.id for a in restored] == [a.id for a in items]
        assert restored == items


class TestFromDocument:
    def test_rejects_non_mapping(self):
        with pytest.raises(ValueError):
            from_document(["not", "a", "document"])

    def test_rejects_missing_events(self):
        with pytest.raises(ValueError):
            from_document({"data": []})

    def test_rejects_events_not_a_list(self):
        with pytest.raises(ValueError):
            from_document({"events": {"id": "1"}})

    def test_rejects_malformed_record(self):
        with pytest.raises(ValueError, match="Malformed"):
            from_document({"events": [{"id": "1", "title": "No dates"}]})

    def test_empty_list_is_valid(self):
        assert from_document({"events": []}) == []
