"""Tests for gelf_pretty/render.py"""

import itertools
import json
import re
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pytest

from gelf_pretty.colors import Colorizer
from gelf_pretty.record import LogRecord, parse_record
from gelf_pretty.render import (
    format_fields,
    format_full_message,
    format_identity,
    format_timestamp,
    format_value,
    level_name,
    render,
)

UTC = timezone.utc


def _record(**overrides) -> LogRecord:
    kwargs = dict(
        version="1.1",
        host="example.org",
        short_message="foo",
        timestamp=1385053862.3072,
        level=6,
    )
    kwargs.update(overrides)
    return LogRecord(**kwargs)


class TestFormatTimestamp:
    def test_utc(self):
        assert format_timestamp(1385053862.3072, UTC) == "[2013-11-21 17:11:02.307]"

    def test_millis_truncated(self):
        assert format_timestamp(0.9999, UTC) == "[1970-01-01 00:00:00.999]"

    def test_zero_padding(self):
        assert format_timestamp(3723.0045, UTC) == "[1970-01-01 01:02:03.004]"

    def test_fixed_offset(self):
        tz = timezone(timedelta(hours=-5))
        assert format_timestamp(1385053862.3072, tz) == "[2013-11-21 12:11:02.307]"

    def test_named_zone(self):
        try:
            tz = ZoneInfo("Europe/Berlin")
        except ZoneInfoNotFoundError:
            pytest.skip("tz database not available")
        assert format_timestamp(1385053862.3072, tz) == "[2013-11-21 18:11:02.307]"

    def test_default_is_local_zone(self):
        local = datetime.fromtimestamp(1385053862)
        expected = f"[{local:%Y-%m-%d %H:%M:%S}.307]"
        assert format_timestamp(1385053862.3072) == expected

    def test_before_epoch(self):
        assert format_timestamp(-1.5, UTC) == "[1969-12-31 23:59:58.500]"


class TestLevelName:
    @pytest.mark.parametrize("level,name", [(0, "EMERGENCY"), (3, "ERROR"), (6, "INFO"), (7, "DEBUG")])
    def test_known(self, level, name):
        assert level_name(level) == name

    @pytest.mark.parametrize("level", [-1, 8, 100])
    def test_out_of_range_is_empty(self, level):
        assert level_name(level) == ""


class TestFormatValue:
    @pytest.mark.parametrize("value,text", [
        ("alice", "alice"),
        (42, "42"),
        (0.5, "0.5"),
        (True, "true"),
        (False, "false"),
        (None, "null"),
        ({"a": 1}, '{"a":1}'),
        ([1, "x"], '[1,"x"]'),
        ("naïve", "naïve"),
    ])
    def test_generic_text(self, value, text):
        assert format_value(value) == text


class TestFormatIdentity:
    def test_host_only(self):
        assert format_identity(_record()) == "example.org"

    def test_app_logger_host(self):
        record = _record(additional_fields=(("_app", "svc"), ("_logger", "db")))
        assert format_identity(record) == "svc/db on example.org"

    def test_app_only(self):
        record = _record(additional_fields=(("_app", "svc"),))
        assert format_identity(record) == "svc on example.org"

    def test_logger_without_app(self):
        record = _record(additional_fields=(("_logger", "db"),))
        assert format_identity(record) == "db on example.org"

    def test_no_host(self):
        record = _record(host="", additional_fields=(("_app", "svc"), ("_logger", "db")))
        assert format_identity(record) == "svc/db"

    def test_nothing(self):
        assert format_identity(_record(host="")) == ""

    def test_empty_app_counts_as_absent(self):
        record = _record(additional_fields=(("_app", ""), ("_logger", "db")))
        assert format_identity(record) == "db on example.org"

    def test_null_app_counts_as_absent(self):
        record = _record(additional_fields=(("_app", None),))
        assert format_identity(record) == "example.org"

    def test_non_string_app(self):
        record = _record(additional_fields=(("_app", 7),))
        assert format_identity(record) == "7 on example.org"


class TestFormatFields:
    def test_specials_excluded_and_underscore_stripped(self):
        record = _record(additional_fields=(("_app", "svc"), ("_logger", "db"), ("_user", "alice")))
        assert format_fields(record) == "user=alice"

    def test_sorted_by_key(self):
        record = _record(additional_fields=(("_b", 2), ("_a", 1), ("_c", 3)))
        assert format_fields(record) == "a=1 b=2 c=3"

    def test_empty(self):
        assert format_fields(_record()) == ""

    def test_only_specials(self):
        record = _record(additional_fields=(("_app", "svc"),))
        assert format_fields(record) == ""


class TestFormatFullMessage:
    def test_empty(self):
        assert format_full_message("") == ""

    def test_single_line(self):
        assert format_full_message("detail") == "\n\tdetail"

    def test_multi_line(self):
        assert format_full_message("a\nb\nc") == "\n\ta\n\tb\n\tc"


class TestRender:
    def test_sample_scenario(self, gelf_line):
        record = parse_record(gelf_line)
        assert render(record, tz=UTC) == "[2013-11-21 17:11:02.307] INFO: example.org: foo"

    def test_special_fields_scenario(self, gelf_dict):
        gelf_dict.update({"_app": "svc", "_logger": "db", "_user": "alice"})
        record = parse_record(json.dumps(gelf_dict))
        assert render(record, tz=UTC) == (
            "[2013-11-21 17:11:02.307] INFO: svc/db on example.org: foo user=alice"
        )

    def test_full_message_appended(self):
        record = _record(full_message="line1\nline2", additional_fields=(("_k", "v"),))
        assert render(record, tz=UTC) == (
            "[2013-11-21 17:11:02.307] INFO: example.org: foo k=v\n\tline1\n\tline2"
        )

    def test_no_trailing_space_without_fields(self):
        assert not render(_record(), tz=UTC).endswith(" ")

    def test_out_of_range_level(self):
        assert render(_record(level=12), tz=UTC) == "[2013-11-21 17:11:02.307] : example.org: foo"

    def test_empty_identity(self):
        assert render(_record(host=""), tz=UTC) == "[2013-11-21 17:11:02.307] INFO: : foo"

    def test_field_order_independent_of_source(self, gelf_dict):
        extras = [("_zeta", 1), ("_alpha", "a"), ("_mid", True)]
        outputs = set()
        for perm in itertools.permutations(extras):
            payload = dict(gelf_dict)
            payload.update(perm)
            outputs.add(render(parse_record(json.dumps(payload)), tz=UTC))
        assert outputs == {"[2013-11-21 17:11:02.307] INFO: example.org: foo alpha=a mid=true zeta=1"}

    def test_deterministic(self, gelf_line):
        record = parse_record(gelf_line)
        assert render(record, tz=UTC) == render(record, tz=UTC)


class TestRenderColor:
    def test_disabled_colorizer_matches_plain(self):
        record = _record(additional_fields=(("_user", "alice"),), full_message="x")
        assert render(record, tz=UTC, colorizer=Colorizer(enabled=False)) == render(record, tz=UTC)

    def test_enabled_colorizer_decorates(self):
        record = _record(additional_fields=(("_user", "alice"),))
        result = render(record, tz=UTC, colorizer=Colorizer(enabled=True))
        assert "\033[32;1mINFO\033[0m" in result
        assert "\033[1mfoo\033[0m" in result
        assert "\033[35muser\033[0m=alice" in result

    def test_stripping_codes_gives_plain_text(self):
        record = _record(level=3, additional_fields=(("_app", "svc"), ("_user", "alice")))
        colored = render(record, tz=UTC, colorizer=Colorizer(enabled=True))
        assert re.sub(r"\033\[[0-9;]*m", "", colored) == render(record, tz=UTC)
