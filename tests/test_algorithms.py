"""Unit tests for the instrumented sorting runners."""
import pytest

from algorithms import (
    REGISTRY,
    EventKind,
    TraceBuilder,
    apply_trace,
    get_algorithm,
    list_algorithms,
    resolve_algorithm,
)
from algorithms.counting import counting_sort
from algorithms.event import snapshots
from sequence import InvalidInput


ALGO_KEYS = ["bubble", "selection", "insertion", "merge", "quick", "heap", "counting"]

SAMPLE_INPUTS = [
    [],
    [7],
    [4, 4, 4],
    [1, 2, 3, 4, 5],
    [5, 4, 3, 2, 1],
    [3, 1, 2, 3, 1, 2],
    [5, 3, 8, 1],
    [9, 1, 8, 2, 7, 3, 6, 4, 5],
    [2, 10, 1, 5],
    [0, 100, 50, 0, 99, 1],
    [64, 34, 25, 12, 22, 11, 90, 34],
]


def run(key, values):
    return REGISTRY[key].run(values)


class TestRunnerContract:
    @pytest.mark.parametrize("key", ALGO_KEYS)
    def test_sorts_every_sample(self, key):
        for values in SAMPLE_INPUTS:
            result, trace = run(key, values)
            assert result == sorted(values)
            assert apply_trace(values, trace) == sorted(values)

    @pytest.mark.parametrize("key", ALGO_KEYS)
    def test_every_snapshot_is_a_permutation(self, key):
        for values in SAMPLE_INPUTS:
            _, trace = run(key, values)
            for snap in snapshots(trace):
                assert len(snap) == len(values)
                assert sorted(snap) == sorted(values)

    @pytest.mark.parametrize("key", ALGO_KEYS)
    def test_indices_in_bounds(self, key):
        for values in SAMPLE_INPUTS:
            _, trace = run(key, values)
            for event in trace:
                assert 1 <= len(event.indices) <= 2
                assert all(0 <= i < len(values) for i in event.indices)
                if event.kind is EventKind.COMPARE:
                    assert event.snapshot is None
                else:
                    assert event.snapshot is not None

    @pytest.mark.parametrize("key", ALGO_KEYS)
    def test_does_not_mutate_input(self, key):
        values = [5, 4, 3, 2, 1]
        run(key, values)
        assert values == [5, 4, 3, 2, 1]

    @pytest.mark.parametrize("key", ALGO_KEYS)
    def test_deterministic(self, key):
        values = [64, 34, 25, 12, 22, 11, 90, 34]
        assert run(key, values) == run(key, values)

    @pytest.mark.parametrize("key", ALGO_KEYS)
    def test_already_sorted_replays_unchanged(self, key):
        values = [1, 2, 2, 3, 5, 8]
        _, trace = run(key, values)
        assert apply_trace(values, trace) == values
        assert any(e.kind is EventKind.COMPARE for e in trace)

    @pytest.mark.parametrize("key", ALGO_KEYS)
    def test_empty_input_gives_empty_trace(self, key):
        assert run(key, []) == ([], ())

    @pytest.mark.parametrize("key", ALGO_KEYS)
    def test_single_element_is_trivial(self, key):
        result, trace = run(key, [7])
        assert result == [7]
        assert apply_trace([7], trace) == [7]

    @pytest.mark.parametrize("key", ALGO_KEYS)
    def test_rejects_non_finite_values(self, key):
        with pytest.raises(InvalidInput):
            run(key, [3, float("nan"), 1])
        with pytest.raises(InvalidInput):
            run(key, [3, float("inf")])

    @pytest.mark.parametrize("key", ALGO_KEYS)
    def test_rejects_non_numeric_values(self, key):
        with pytest.raises(InvalidInput):
            run(key, [3, "2", 1])
        with pytest.raises(InvalidInput):
            run(key, [True, False])

    def test_runner_appends_to_given_sink(self):
        sink = TraceBuilder()
        REGISTRY["bubble"].fn([2, 1], sink)
        assert len(sink) == 3


class TestBubble:
    def test_scenario_five_three_eight_one(self):
        result, trace = run("bubble", [5, 3, 8, 1])
        assert result == [1, 3, 5, 8]
        swaps = [e for e in trace if e.kind is EventKind.SWAP]
        assert swaps[0].indices == (0, 1)
        updates = [e for e in trace if e.kind is EventKind.UPDATE]
        assert updates[-1].snapshot == (1, 3, 5, 8)

    def test_one_compare_per_comparison(self):
        _, trace = run("bubble", [1, 2, 3])
        assert [e.indices for e in trace] == [(0, 1), (1, 2), (0, 1)]

    def test_swap_then_update(self):
        _, trace = run("bubble", [2, 1])
        assert [e.kind for e in trace] == [EventKind.COMPARE, EventKind.SWAP, EventKind.UPDATE]
        assert trace[2].snapshot == (1, 2)


class TestSelection:
    def test_compare_pairs(self):
        _, trace = run("selection", [3, 1, 2])
        compares = [e.indices for e in trace if e.kind is EventKind.COMPARE]
        assert compares == [(0, 1), (1, 2), (1, 2)]

    def test_no_swap_when_minimum_in_place(self):
        _, trace = run("selection", [1, 3, 2])
        swaps = [e.indices for e in trace if e.kind is EventKind.SWAP]
        assert swaps == [(1, 2)]


class TestInsertion:
    def test_event_sequence(self):
        _, trace = run("insertion", [3, 1, 2])
        kinds = [e.kind.value[0] for e in trace]
        assert "".join(kinds) == "csuucsucu"
        assert [e.indices for e in trace if e.kind is EventKind.COMPARE] == [(1, 0), (2, 1), (1, 0)]

    def test_final_update_marks_key_position(self):
        _, trace = run("insertion", [3, 1, 2])
        assert trace[3].indices == (0,)
        assert trace[-1].indices == (1,)
        assert trace[-1].snapshot == (1, 2, 3)


class TestMerge:
    def test_scenario_nine_values(self):
        values = [9, 1, 8, 2, 7, 3, 6, 4, 5]
        result, trace = run("merge", values)
        assert result == [1, 2, 3, 4, 5, 6, 7, 8, 9]
        assert snapshots(trace)[-1] == (1, 2, 3, 4, 5, 6, 7, 8, 9)

    def test_compares_stay_inside_merged_range(self):
        values = [9, 1, 8, 2, 7, 3, 6, 4, 5]
        _, trace = run("merge", values)

        ranges = []

        def walk(lo, hi):
            if lo >= hi:
                return
            mid = (lo + hi) // 2
            walk(lo, mid)
            walk(mid + 1, hi)
            ranges.append((lo, hi))

        walk(0, len(values) - 1)

        events = iter(trace)
        for lo, hi in ranges:
            placed = 0
            while placed < hi - lo + 1:
                event = next(events)
                assert all(lo <= i <= hi for i in event.indices)
                if event.kind is EventKind.SWAP:
                    assert len(event.indices) == 1
                    placed += 1
            assert next(events).kind is EventKind.UPDATE
        assert next(events, None) is None

    def test_tail_drain_has_no_compare(self):
        _, trace = run("merge", [1, 2])
        kinds = [e.kind for e in trace]
        assert kinds == [
            EventKind.COMPARE, EventKind.SWAP, EventKind.UPDATE,
            EventKind.SWAP, EventKind.UPDATE,
        ]


class TestQuick:
    def test_all_equal(self):
        result, trace = run("quick", [4, 4, 4])
        assert result == [4, 4, 4]
        assert snapshots(trace)[-1] == (4, 4, 4)

    def test_lomuto_events(self):
        _, trace = run("quick", [3, 1, 2])
        assert [(e.kind.value, e.indices) for e in trace] == [
            ("compare", (0, 2)),
            ("compare", (1, 2)),
            ("swap", (0, 1)),
            ("update", (0, 1)),
            ("swap", (1, 2)),
            ("update", (1, 2)),
        ]


class TestHeap:
    def test_right_child_compared_against_best_so_far(self):
        _, trace = run("heap", [1, 2, 3])
        assert trace[0].indices == (0, 1)
        assert trace[1].indices == (1, 2)
        assert trace[2].kind is EventKind.SWAP
        assert trace[2].indices == (0, 2)
        assert trace[2].snapshot == (3, 2, 1)

    def test_extraction_swaps_root_with_boundary(self):
        _, trace = run("heap", [1, 2, 3])
        swaps = [e.indices for e in trace if e.kind is EventKind.SWAP]
        assert swaps == [(0, 2), (0, 2), (0, 1), (0, 1)]


class TestCounting:
    def test_scenario_single_index_compares(self):
        result, trace = run("counting", [2, 10, 1, 5])
        assert result == [1, 2, 5, 10]
        assert snapshots(trace)[-1] == (1, 2, 5, 10)
        assert all(len(e.indices) == 1 for e in trace)

    def test_phases(self):
        _, trace = run("counting", [2, 10, 1, 5])
        compares = [e.indices for e in trace if e.kind is EventKind.COMPARE]
        assert compares == [(1,), (2,), (3,), (0,), (1,), (2,), (3,)]
        # placement (4) + write-back (4), each a swap + update
        assert len(trace) == 7 + 16
        write_back = [e.indices for e in trace[-8:] if e.kind is EventKind.SWAP]
        assert write_back == [(0,), (1,), (2,), (3,)]

    def test_negative_values(self):
        result, trace = run("counting", [-3, 2, -1, 0, -3])
        assert result == [-3, -3, -1, 0, 2]
        assert apply_trace([-3, 2, -1, 0, -3], trace) == result

    def test_rejects_floats(self):
        with pytest.raises(InvalidInput):
            counting_sort([1.5, 2.0], TraceBuilder())

    def test_rejects_huge_key_range(self):
        with pytest.raises(InvalidInput):
            counting_sort([0, 10 ** 7], TraceBuilder())


class TestRegistry:
    def test_all_algorithms_registered_in_order(self):
        assert [a.key for a in list_algorithms()] == ALGO_KEYS

    def test_unknown_key_falls_back_to_bubble(self):
        assert get_algorithm("bogo") is None
        assert resolve_algorithm("bogo").key == "bubble"
        assert resolve_algorithm(None).key == "bubble"

    def test_known_key_resolves(self):
        assert resolve_algorithm("heap") is REGISTRY["heap"]

    def test_pseudocode_line_per_event(self):
        info = REGISTRY["insertion"]
        _, trace = info.run([3, 1, 2])
        lines = [info.pseudocode_line(e) for e in trace[:4]]
        assert lines == [4, 5, 7, 7]
        assert info.pseudocode[7].strip().startswith("arr[j+1]")
        assert info.pseudocode_line(None) == -1

    def test_every_event_kind_maps_to_a_line(self):
        for info in list_algorithms():
            for kind in EventKind:
                assert 0 <= info.event_lines[kind] < len(info.pseudocode)

    def test_float_values_sort_with_comparison_runners(self):
        result, _ = run("merge", [2.5, -1.0, 2.0])
        assert result == [-1.0, 2.0, 2.5]
