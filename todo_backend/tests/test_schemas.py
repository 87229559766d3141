from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from todo_api.schemas import TodoIn, TodoOut
from todo_api.utils import incoming_window, start_of_day


class TestTodoIn:
    def test_camel_case_input(self):
        todo = TodoIn.model_validate(
            {"title": "  Trim me  ", "expirationDate": "2030-01-31T10:00:00", "percentageOfCompletion": 5}
        )
        assert todo.title == "Trim me"
        assert todo.expiration_date == datetime(2030, 1, 31, 10, 0, 0)
        assert todo.percentage_of_completion == 5
        assert todo.id is None

    def test_snake_case_input_and_defaults(self):
        todo = TodoIn.model_validate({"expiration_date": "2030-01-31"})
        assert todo.expiration_date == datetime(2030, 1, 31)
        assert todo.title is None
        assert todo.percentage_of_completion == 0

    def test_aware_datetime_becomes_naive_local(self):
        aware = datetime(2030, 1, 31, 12, 0, tzinfo=timezone.utc)
        todo = TodoIn.model_validate({"expirationDate": aware.isoformat()})
        assert todo.expiration_date.tzinfo is None
        assert todo.expiration_date == aware.astimezone().replace(tzinfo=None)

    @pytest.mark.parametrize(
        "expiration",
        ["tomorrow", "9999-12-31T23:59:59-14:00", "0001-01-01T00:00:00+14:00"],
    )
    def test_invalid_expiration(self, expiration):
        with pytest.raises(ValidationError):
            TodoIn.model_validate({"expirationDate": expiration})

    def test_out_serializes_camel_case(self):
        out = TodoOut(
            id=1,
            title="t",
            description=None,
            expiration_date=datetime(2030, 1, 1),
            percentage_of_completion=100,
        )
        dumped = out.model_dump(by_alias=True)
        assert dumped["expirationDate"] == datetime(2030, 1, 1)
        assert dumped["percentageOfCompletion"] == 100


class TestIncomingWindow:
    @pytest.mark.parametrize("days", [float("nan"), float("inf"), float("-inf"), 5_000_000, -5_000_000, 1e12])
    def test_rejects_days_outside_date_range(self, days):
        with pytest.raises(ValueError):
            incoming_window(days, datetime(2026, 10, 19, 9, 0))

    def test_zero_days_is_rest_of_today(self):
        now = datetime(2026, 10, 19, 22, 15)
        assert incoming_window(0, now) == (now, datetime(2026, 10, 20))

    def test_fractional_days(self):
        now = datetime(2026, 10, 19, 9, 0)
        start, end = incoming_window(1.25, now)
        assert start == now
        assert end == datetime(2026, 10, 21, 6, 0)

    def test_start_of_day(self):
        assert start_of_day(datetime(2026, 10, 19, 23, 59, 59)) == datetime(2026, 10, 19)
        assert start_of_day(datetime(2026, 10, 19)) + timedelta(days=1) == datetime(2026, 10, 20)
