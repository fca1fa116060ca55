"""Unit tests for rating aggregation and report helpers."""

from __future__ import annotations

from datetime import datetime, timezone

from skillswap.admin.report_service import payload_size, report_file_name
from skillswap.ratings.service import average_of, round_half_up


class TestAverage:
    def test_no_ratings(self):
        assert average_of(None, 0) == 0.0

    def test_single_rating(self):
        assert average_of(5, 1) == 5.0

    def test_rounded_to_one_decimal(self):
        # 5 + 4 + 4 = 13 / 3 = 4.333...
        assert average_of(13, 3) == 4.3

    def test_rounds_up(self):
        # 5 + 5 + 4 = 14 / 3 = 4.666...
        assert average_of(14, 3) == 4.7

    def test_exact_tie_rounds_up(self):
        # 1 + 2 + 3 + 3 = 9 / 4 = 2.25
        assert average_of(9, 4) == 2.3

    def test_tie_rounds_up_with_odd_tenths(self):
        # 4 + 5 + 5 + 5 = 19 / 4 = 4.75
        assert average_of(19, 4) == 4.8


class TestRoundHalfUp:
    def test_one_place(self):
        assert round_half_up(2.25) == 2.3
        assert round_half_up(2.35) == 2.4

    def test_two_places(self):
        assert round_half_up(3.125, 2) == 3.13

    def test_below_tie_rounds_down(self):
        assert round_half_up(2.249) == 2.2


class TestReportHelpers:
    def test_file_name(self):
        start = datetime(2026, 1, 1, tzinfo=timezone.utc)
        end = datetime(2026, 1, 31, 23, 59, tzinfo=timezone.utc)
        assert report_file_name("swap_stats", start, end) == "swap_stats_2026-01-01_to_2026-01-31.json"

    def test_payload_size_is_compact_json_length(self):
        assert payload_size({"a": 1, "b": [1, 2]}) == len('{"a":1,"b":[1,2]}')
