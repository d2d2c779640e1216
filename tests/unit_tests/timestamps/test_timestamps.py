"""
Timestamp codec unit tests.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from debuglog.exceptions import InvalidTimestampFormat
from debuglog.timestamps import format_timestamp, parse_timestamp, try_parse_timestamp


class TestFormat:
    def test_fixed_pattern(self) -> None:
        assert format_timestamp(datetime(2024, 1, 5, 7, 3, 9)) == "2024-01-05_07-03-09"

    def test_drops_sub_second_precision(self) -> None:
        assert format_timestamp(datetime(2024, 1, 5, 7, 3, 9, 999999)) == "2024-01-05_07-03-09"

    def test_output_is_safe_as_file_stem(self) -> None:
        text = format_timestamp(datetime(2030, 12, 31, 23, 59, 59))
        assert "/" not in text
        assert "\\" not in text
        assert "." not in text
        assert len(text) == 19

    def test_aware_instant_rendered_in_local_time(self) -> None:
        aware = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)
        expected = aware.astimezone().replace(tzinfo=None).strftime("%Y-%m-%d_%H-%M-%S")
        assert format_timestamp(aware) == expected

    def test_lexical_order_matches_chronological_order(self) -> None:
        base = datetime(2024, 9, 9, 9, 59, 58)
        instants = [base + timedelta(seconds=s) for s in (0, 1, 2, 3600, 86400 * 40)]
        rendered = [format_timestamp(i) for i in instants]
        assert rendered == sorted(rendered)


class TestParse:
    @pytest.mark.parametrize(
        "instant",
        [
            datetime(2024, 2, 29, 0, 0, 0),
            datetime(1999, 12, 31, 23, 59, 59, 500000),
            datetime(2024, 5, 1, 12, 0, 0, 1),
        ],
    )
    def test_round_trip_truncates_to_second(self, instant: datetime) -> None:
        assert parse_timestamp(format_timestamp(instant)) == instant.replace(microsecond=0)

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "notes",
            "2024-1-05_07-03-09",
            "2024-01-05 07:03:09",
            "2024-01-05_07-03-09.log",
            "2024-01-05_07-03-09\n",
            "2024-13-05_07-03-09",
            "2023-02-29_00-00-00",
        ],
    )
    def test_malformed_input_raises(self, text: str) -> None:
        with pytest.raises(InvalidTimestampFormat) as exc_info:
            parse_timestamp(text)
        assert exc_info.value.code == "INVALID_TIMESTAMP"

    def test_invalid_format_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_timestamp("yesterday")

    def test_try_parse_returns_none_on_malformed_input(self) -> None:
        assert try_parse_timestamp("yesterday") is None
        assert try_parse_timestamp("2024-01-05_07-03-09") == datetime(2024, 1, 5, 7, 3, 9)
