"""Tests for the TAP parser state machine."""

import logging

import pytest

from tapline.model import Assertion, Plan
from tapline.parser import InvalidHeaderError, TapParser, parse_stream

TAP_HEADER = "TAP version 13"


def feed(recorder, *lines):
    parser = TapParser(TAP_HEADER, recorder)
    for line in lines:
        parser.line(line)
    return parser


# --- construction ---


def test_valid_header_starts_empty(recorder):
    parser = TapParser(TAP_HEADER, recorder)
    assert parser.tests == []
    assert parser.plan is None
    assert recorder.calls == []


@pytest.mark.parametrize("first_line", ["invalid", "", "TAP version 12", None])
def test_invalid_header_raises(recorder, first_line):
    with pytest.raises(InvalidHeaderError) as exc_info:
        TapParser(first_line, recorder)
    assert exc_info.value.first_line == first_line
    assert "TAP version 13" in str(exc_info.value)


def test_invalid_header_is_a_value_error(recorder):
    with pytest.raises(ValueError):
        TapParser("invalid", recorder)


# --- streaming ---


def test_single_passing_test(recorder):
    parser = feed(recorder, "# the happy path", "ok 1 should be equal")

    assert len(parser.tests) == 1
    test = parser.tests[0]
    assert test.name == "the happy path"
    assert test.assertions == (Assertion(message="should be equal", passed=True),)
    assert test.passed is True


def test_single_failing_test(recorder):
    parser = feed(recorder, "# the happy path", "not ok 2 should be equivalent")

    test = parser.tests[0]
    assert test.assertions == (
        Assertion(message="should be equivalent", passed=False),
    )
    assert test.passed is False


def test_assertions_keep_order_and_fold_status(recorder):
    parser = feed(recorder, "# t", "ok 1 a", "not ok 2 b")

    test = parser.tests[0]
    assert [(a.message, a.passed) for a in test.assertions] == [
        ("a", True),
        ("b", False),
    ]
    assert test.passed is False


def test_title_is_visible_before_any_assertion(recorder):
    parser = feed(recorder, "# empty")
    assert [t.name for t in parser.tests] == ["empty"]
    assert parser.tests[0].passed is True


def test_assertions_belong_to_the_most_recent_title(recorder):
    parser = feed(
        recorder,
        "# first",
        "ok 1 a",
        "# second",
        "not ok 2 b",
        "ok 3 c",
        "# third",
    )

    assert [t.name for t in parser.tests] == ["first", "second", "third"]
    assert [len(t.assertions) for t in parser.tests] == [1, 2, 0]
    assert [t.passed for t in parser.tests] == [True, False, True]


def test_formatter_receives_events_in_order(recorder):
    feed(recorder, "# t", "ok 1 a", "some output", "not ok 2 b", "1..2")

    assert recorder.calls == [
        ("new_test", ("t",)),
        ("assertion", (True, "a")),
        ("log_output", ("some output",)),
        ("assertion", (False, "b")),
    ]


def test_other_lines_are_logged_on_the_current_test(recorder):
    parser = feed(recorder, "# t", "  ---", "  operator: equal", "ok 1 a")
    assert parser.tests[0].log == ("  ---", "  operator: equal")


def test_repeated_header_is_treated_as_output(recorder):
    parser = feed(recorder, "# t", TAP_HEADER)
    assert recorder.calls[-1] == ("log_output", (TAP_HEADER,))
    assert parser.tests[0].log == (TAP_HEADER,)


# --- lines before any title ---


def test_lines_before_first_title_are_dropped(recorder):
    parser = feed(recorder, "ok 1 orphan", "not ok 2 orphan", "1..2", "noise")

    assert parser.tests == []
    assert parser.plan is None
    assert recorder.calls == []


def test_dropped_lines_are_debug_logged(recorder, caplog):
    logger = logging.getLogger("tapline.test_parser")
    parser = TapParser(TAP_HEADER, recorder, logger=logger)
    with caplog.at_level(logging.DEBUG, logger="tapline.test_parser"):
        parser.line("ok 1 orphan")
    assert "Dropped line before any test title" in caplog.text


# --- plan ---


def test_plan_after_assertions(recorder):
    parser = feed(recorder, "# t", "not ok 1 x", "1..1")
    parser.finalise()
    assert parser.plan == Plan(1, 1)


def test_last_valid_plan_wins(recorder):
    parser = feed(recorder, "# t", "1..3", "1..5")
    assert parser.plan == Plan(1, 5)


def test_same_plan_twice_is_idempotent(recorder):
    parser = feed(recorder, "# t", "1..3", "1..3")
    assert parser.plan == Plan(1, 3)


@pytest.mark.parametrize("bad", ["abc..def", "1..2..3", "5"])
def test_malformed_plan_keeps_previous(recorder, bad):
    parser = feed(recorder, "# t", "1..3", bad)
    assert parser.plan == Plan(1, 3)


def test_malformed_plan_is_surfaced_as_output(recorder):
    feed(recorder, "# t", "1..2..3")
    assert recorder.calls[-1] == ("log_output", ("1..2..3",))


# --- finalise ---


def test_finalise_passes_plan_and_tests(recorder):
    parser = feed(recorder, "# a", "ok 1 x", "# b", "1..1")
    parser.finalise()

    name, (plan, tests) = recorder.calls[-1]
    assert name == "summerise"
    assert plan == Plan(1, 1)
    assert [t.name for t in tests] == ["a", "b"]
    assert parser.finalised is True


def test_finalise_with_no_lines(recorder):
    parser = TapParser(TAP_HEADER, recorder)
    parser.finalise()
    assert recorder.calls == [("summerise", (None, []))]


def test_line_after_finalise_raises(recorder):
    parser = TapParser(TAP_HEADER, recorder)
    parser.finalise()
    with pytest.raises(RuntimeError):
        parser.line("# too late")
    assert parser.tests == []


def test_finalise_twice_raises(recorder):
    parser = TapParser(TAP_HEADER, recorder)
    parser.finalise()
    with pytest.raises(RuntimeError):
        parser.finalise()
    assert recorder.methods().count("summerise") == 1


# --- parse_stream ---


def test_parse_stream_strips_line_endings(recorder):
    parser = parse_stream(
        ["TAP version 13\r\n", "# t\n", "ok 1 a\n", "1..1"], recorder
    )
    assert parser.finalised
    assert parser.tests[0].name == "t"
    assert parser.tests[0].assertions[0].message == "a"
    assert parser.plan == Plan(1, 1)


def test_parse_stream_empty_input_raises(recorder):
    with pytest.raises(InvalidHeaderError):
        parse_stream([], recorder)


def test_parse_stream_stops_at_bad_header(recorder):
    consumed = []

    def lines():
        for line in ["invalid\n", "# t\n", "ok 1 a\n"]:
            consumed.append(line)
            yield line

    with pytest.raises(InvalidHeaderError):
        parse_stream(lines(), recorder)
    assert consumed == ["invalid\n"]
    assert recorder.calls == []


def test_parse_stream_reads_lazily(recorder):
    seen_by_formatter = []

    def lines():
        yield "TAP version 13\n"
        yield "# t\n"
        seen_by_formatter.append(list(recorder.methods()))
        yield "ok 1 a\n"

    parse_stream(lines(), recorder)
    # The title was reported before the next line was pulled
    assert seen_by_formatter == [["new_test"]]
