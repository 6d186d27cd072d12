"""Tests for the run recorder and comparison mode."""
import pytest

from engine.recorder import Recorder, compare
from sequence import InvalidInput


def recorded(key, values):
    rec = Recorder()
    rec.start(key, values)
    rec.run_to_completion()
    return rec


class TestRecorder:
    def test_metrics(self):
        rec = recorded("bubble", [5, 3, 8, 1])
        m = rec.get_metrics()
        assert m.algo_key == "bubble"
        assert m.algo_label == "Bubble Sort"
        assert m.size == 4
        assert m.comparisons == 6
        assert m.swaps == 4
        assert m.updates == 4
        assert m.total_events == m.comparisons + m.swaps + m.updates
        assert m.verified
        assert rec.result == [1, 3, 5, 8]

    def test_unknown_algorithm_falls_back(self):
        rec = Recorder()
        info = rec.start("bogo", [2, 1])
        assert info.key == "bubble"
        assert rec.algo_info is info

    def test_counting_rejects_floats_at_start(self):
        with pytest.raises(InvalidInput):
            Recorder().start("counting", [1.5, 2])

    def test_run_before_start(self):
        with pytest.raises(RuntimeError):
            Recorder().run_to_completion()

    def test_stepper_before_run(self):
        rec = Recorder()
        rec.start("merge", [2, 1])
        with pytest.raises(RuntimeError):
            rec.stepper()

    def test_stepper_from_run(self):
        rec = recorded("heap", [3, 1, 2])
        stepper = rec.stepper()
        assert stepper.current_frame.view.sequence == (3, 1, 2)
        stepper.jump_to_end()
        assert stepper.current_frame.view.sequence == (1, 2, 3)

    def test_export(self):
        rec = recorded("quick", [2, 1])
        data = rec.export()
        assert data["algo_key"] == "quick"
        assert data["initial"] == [2, 1]
        assert data["result"] == [1, 2]
        assert data["metrics"]["verified"] is True
        assert len(data["events"]) == data["metrics"]["total_events"]

    def test_start_copies_input(self):
        values = [3, 2, 1]
        rec = recorded("selection", values)
        assert values == [3, 2, 1]
        assert rec.initial == [3, 2, 1]


class TestCompare:
    def test_merge_beats_bubble_on_reversed_input(self):
        values = [8, 7, 6, 5, 4, 3, 2, 1]
        result = compare(recorded("bubble", values), recorded("merge", values))
        assert result.left.comparisons == 28
        assert result.right.comparisons == 12
        assert result.winner_comparisons == "Merge Sort"
        assert result.winner_swaps == "Merge Sort"

    def test_tie(self):
        values = [3, 1, 2]
        result = compare(recorded("insertion", values), recorded("insertion", values))
        assert result.winner_comparisons == "tie"
        assert result.winner_events == "tie"
