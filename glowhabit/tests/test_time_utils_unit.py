import pytest
from datetime import date, datetime

from glowhabit.exceptions import ValidationError
from glowhabit.utils.time_utils import (
    last_n_days, month_bounds, parse_iso_date, time_of_day, to_iso, unique_sorted_dates, week_bounds,
)


class TestTimeUtilsUnit:

    @pytest.mark.parametrize('value', [
        '2025-01-15',
        '2025-01-15T23:59:00.000Z',
        date(2025, 1, 15),
        datetime(2025, 1, 15, 7, 30),
    ])
    def test_parse_iso_date(self, value):
        assert parse_iso_date(value) == date(2025, 1, 15)

    @pytest.mark.parametrize('value', ['', 'yesterday', None, 42])
    def test_parse_invalid(self, value):
        with pytest.raises(ValidationError):
            parse_iso_date(value)

    def test_to_iso(self):
        assert to_iso(datetime(2025, 3, 1, 12)) == '2025-03-01'

    def test_last_n_days(self, today):
        assert last_n_days(3, today) == ['2025-01-15', '2025-01-14', '2025-01-13']
        assert last_n_days(2, today, offset=7) == ['2025-01-08', '2025-01-07']
        assert last_n_days(0, today) == []

    def test_month_bounds(self):
        assert month_bounds('2024-02-10') == (date(2024, 2, 1), date(2024, 2, 29))
        assert month_bounds(date(2025, 12, 31)) == (date(2025, 12, 1), date(2025, 12, 31))

    def test_week_bounds(self, today):
        assert week_bounds(today) == (date(2025, 1, 13), date(2025, 1, 19))
        assert week_bounds('2025-01-19') == (date(2025, 1, 13), date(2025, 1, 19))

    def test_unique_sorted_dates(self):
        values = ['2025-01-02', '2025-01-01', '2025-01-02T10:00:00', 'bad']
        assert unique_sorted_dates(values) == [date(2025, 1, 1), date(2025, 1, 2)]
        assert unique_sorted_dates(values, reverse=True)[0] == date(2025, 1, 2)

    @pytest.mark.parametrize('hour, expected', [
        (0, 'morning'),
        (11, 'morning'),
        (12, 'afternoon'),
        (17, 'evening'),
        (21, 'night'),
    ])
    def test_time_of_day(self, hour, expected):
        assert time_of_day(hour) == expected
