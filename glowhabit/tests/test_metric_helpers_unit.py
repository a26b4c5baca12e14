import pytest
from datetime import date

from glowhabit.helpers import metric_helpers


class TestStreakHelpersUnit:

    def test_current_streak_empty(self, today):
        assert metric_helpers.current_streak([], today) == 0

    def test_current_streak_today_only(self, today):
        assert metric_helpers.current_streak([today], today) == 1

    def test_current_streak_three_days(self, today, days_ago):
        assert metric_helpers.current_streak([days_ago(0), days_ago(1), days_ago(2)], today) == 3

    def test_grace_rule_yesterday_counts(self, days_ago, today):
        # Today not done yet, but the run through yesterday is still alive
        assert metric_helpers.current_streak([days_ago(1)], today) == 1
        assert metric_helpers.current_streak([days_ago(1), days_ago(2), days_ago(3)], today) == 3

    def test_two_missed_days_break_streak(self, days_ago, today):
        assert metric_helpers.current_streak([days_ago(2), days_ago(3)], today) == 0

    def test_gap_stops_count(self, days_ago, today):
        assert metric_helpers.current_streak([days_ago(1), days_ago(2), days_ago(4)], today) == 2

    def test_unsorted_duplicates_and_mixed_types(self, today, days_ago):
        dates = [days_ago(1), today, days_ago(1), date(2025, 1, 13)]
        assert metric_helpers.current_streak(dates, today) == 3

    def test_bad_values_are_skipped(self, today, days_ago):
        assert metric_helpers.current_streak(['not-a-date', days_ago(0)], today) == 1

    def test_run_lengths(self):
        runs = metric_helpers.run_lengths(['2025-01-05', '2025-01-01', '2025-01-02', '2025-01-02'])
        assert list(runs) == [2, 1]
        assert len(metric_helpers.run_lengths([])) == 0

    def test_longest_streak_edge_cases(self, today):
        assert metric_helpers.longest_streak([], today) == 0
        assert metric_helpers.longest_streak(['2024-06-01'], today) == 1

    def test_longest_streak_finds_old_run(self, today, days_ago):
        dates = [days_ago(10), days_ago(9), days_ago(8), days_ago(0)]
        assert metric_helpers.longest_streak(dates, today) == 3
        assert metric_helpers.current_streak(dates, today) == 1

    @pytest.mark.parametrize('offsets', [
        [],
        [0],
        [1],
        [0, 1, 2, 5, 6],
        [1, 2, 3, 4, 10, 11],
        [20, 21, 22, 23, 24, 25, 0, 1],
    ])
    def test_longest_never_below_current(self, today, days_ago, offsets):
        dates = [days_ago(n) for n in offsets]
        assert metric_helpers.longest_streak(dates, today) >= metric_helpers.current_streak(dates, today)


class TestRateHelpersUnit:

    def test_window_rate_empty(self, today):
        assert metric_helpers.window_completion_rate([], 30, today) == 0

    def test_window_rate_full(self, today, days_ago):
        dates = [days_ago(n) for n in range(30)]
        assert metric_helpers.window_completion_rate(dates, 30, today) == 100

    def test_window_rate_half(self, today, days_ago):
        dates = [days_ago(n) for n in range(0, 30, 2)]
        assert metric_helpers.window_completion_rate(dates, 30, today) == 50

    def test_window_rate_ignores_older_dates(self, today, days_ago):
        dates = [days_ago(n) for n in range(30, 60)]
        assert metric_helpers.window_completion_rate(dates, 30, today) == 0

    def test_window_rate_rounds(self, today, days_ago):
        # 1 of 30 days -> 3.33% -> 3
        assert metric_helpers.window_completion_rate([days_ago(0)], 30, today) == 3

    def test_zero_window(self, today):
        assert metric_helpers.window_completion_rate([today], 0, today) == 0

    def test_daily_completion_matrix(self):
        matrix = metric_helpers.daily_completion_matrix(
            {'a': ['2025-01-01'], 'b': []},
            ['2025-01-01', '2025-01-02'],
        )
        assert matrix.shape == (2, 2)
        assert bool(matrix.loc['2025-01-01', 'a']) is True
        assert not matrix['b'].any()

    def test_daily_completion_matrix_without_entities(self):
        matrix = metric_helpers.daily_completion_matrix({}, ['2025-01-01', '2025-01-02'])
        assert matrix.shape == (2, 0)
        assert list(matrix.sum(axis=1)) == [0, 0]

    def test_calendar_days(self):
        days = metric_helpers.calendar_days('2024-02-01', '2024-02-29')
        assert len(days) == 29
        assert days[0] == '2024-02-01'
        assert days[-1] == '2024-02-29'


class TestStabilityHelpersUnit:

    def test_round_half_up(self):
        assert metric_helpers.round_half_up(2.5) == 3
        assert metric_helpers.round_half_up(-2.5) == -2
        assert metric_helpers.round_half_up(0.49) == 0

    def test_safe_ratio(self):
        assert metric_helpers.safe_ratio(3, 0) == 0.0
        assert metric_helpers.safe_ratio(1, 4) == 0.25

    def test_stability_equal_scores(self):
        assert metric_helpers.stability_score([40, 40, 40, 40]) == 100

    def test_stability_divergent_scores(self):
        # population std of [100, 0, 100, 0] is 50
        assert metric_helpers.stability_score([100, 0, 100, 0]) == 50

    @pytest.mark.parametrize('scores, expected', [
        # std 0.433 rounds away
        ([50, 50, 50, 51], 100),
        # std 0.866
        ([50, 50, 50, 52], 99),
    ])
    def test_stability_small_spread(self, scores, expected):
        assert metric_helpers.stability_score(scores) == expected

    def test_stability_empty(self):
        assert metric_helpers.stability_score([]) == 100

    def test_emotional_stability(self):
        assert metric_helpers.emotional_stability([]) == 100
        assert metric_helpers.emotional_stability([35]) == 100
        assert metric_helpers.emotional_stability([0, 20]) == 80
        assert metric_helpers.emotional_stability([-100, 100]) == 0
