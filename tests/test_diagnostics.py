"""Tests for the search trace sinks."""

import io
import math

import pytest

from arithmetic import FractionValue
from diagnostics import Diagnostics, PrintDiagnostics, RecordingDiagnostics, SearchStep
from rational_search import Outcome, RationalSearch


@pytest.fixture
def recording():
    return RecordingDiagnostics()


class TestRecordingDiagnostics:
    def test_start_receives_integer_part(self, recording):
        RationalSearch("int64", recording).search(3.25, 1e-9)
        assert recording.starts == [(3.25, 1e-9, 3)]

    def test_start_integer_part_is_signed(self, recording):
        RationalSearch("int64", recording).search(-3.25, 1e-9)
        assert recording.starts[0][2] == -3

    def test_first_step_is_unit_interval(self, recording):
        RationalSearch("int64", recording).search(0.25, 1e-9)
        first = recording.steps[0]
        assert first == SearchStep(0, FractionValue(0, 1), FractionValue(1, 1), 0.25, 0.75)

    def test_steps_numbered(self, recording):
        RationalSearch("int64", recording).search(1.0 / math.sqrt(2), 1e-9)
        assert [s.iteration for s in recording.steps] == list(range(len(recording.steps)))

    def test_one_step_per_update_plus_final_test(self, recording):
        result = RationalSearch("int64", recording).search(math.pi, 1e-9)
        assert len(recording.steps) == result.iterations + 1

    def test_finish_receives_result(self, recording):
        result = RationalSearch("int64", recording).search(0.1, 1e-9)
        assert recording.results == [result]

    def test_note_on_fine_precision(self, recording):
        RationalSearch("int64", recording).search(0.5, 1e-14)
        assert any("below" in n for n in recording.notes)

    def test_note_on_overflow_stop(self, recording):
        result = RationalSearch("int8", recording).search(math.pi, 1e-9)
        assert result.outcome is Outcome.OVERFLOW_STOPPED
        assert any("exceed" in n for n in recording.notes)

    def test_note_on_iteration_limit(self, recording):
        RationalSearch("int64", recording, max_iterations=2).search(1.0 / math.sqrt(2), 1e-12)
        assert any("no convergence" in n for n in recording.notes)


class TestPrintDiagnostics:
    def test_prints_to_stream(self):
        out = io.StringIO()
        RationalSearch("int32", PrintDiagnostics(out)).search(6.0 / 7.0, 1e-9)
        lines = out.getvalue().splitlines()
        assert lines[0].startswith("Fraction: val = ")
        assert "testlow" in lines[1]
        assert lines[-1].startswith("Fraction: DONE")
        assert "6/7" in lines[-1]

    def test_defaults_to_stderr(self, capsys):
        RationalSearch("int32", PrintDiagnostics()).search(0.5, 1e-9)
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Fraction: DONE" in captured.err


class TestNoEffectOnResult:
    @pytest.mark.parametrize("value", [0.1, 6.0 / 7.0, math.pi, -math.e])
    def test_same_result_with_any_sink(self, value):
        plain = RationalSearch("int64").search(value, 1e-10)
        traced = RationalSearch("int64", PrintDiagnostics(io.StringIO())).search(value, 1e-10)
        recorded = RationalSearch("int64", RecordingDiagnostics()).search(value, 1e-10)
        assert plain == traced == recorded

    def test_base_sink_is_silent(self, capsys):
        RationalSearch("int64", Diagnostics()).search(0.3, 1e-9)
        captured = capsys.readouterr()
        assert captured.out == "" and captured.err == ""
