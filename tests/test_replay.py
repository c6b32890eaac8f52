"""Tests for the replay controller (cursor over a precomputed trace)."""

import pytest

from engine import ReplacementPolicy, generate_trace_fifo
from replay import ReplayController

REFS = [1, 2, 1, 3, 4]


@pytest.fixture
def controller():
    ctrl = ReplayController()
    ctrl.load(generate_trace_fifo(REFS, 3), ReplacementPolicy.FIFO)
    return ctrl


class TestLoading:
    def test_starts_before_first_step(self, controller) -> None:
        assert controller.current_step == -1
        assert controller.current_record is None
        assert controller.status == "SIMULATION_READY // FIFO // AWAITING COMMAND"

    def test_trace_is_stored_immutably(self, controller) -> None:
        assert isinstance(controller.trace, tuple)
        assert len(controller.trace) == len(REFS)

    def test_reload_rewinds(self, controller) -> None:
        controller.step(1)
        controller.play()
        controller.load(generate_trace_fifo([9], 3), ReplacementPolicy.FIFO)
        assert controller.current_step == -1
        assert not controller.playing

    def test_empty_controller_ignores_navigation(self) -> None:
        ctrl = ReplayController()
        ctrl.step(1)
        ctrl.play()
        assert ctrl.current_step == -1
        assert not ctrl.playing
        assert not ctrl.can_step_forward
        assert ctrl.stats()["total_refs"] == 0


class TestNavigation:
    def test_step_forward_and_back(self, controller) -> None:
        controller.step(1)
        controller.step(1)
        assert controller.current_record.reference == 2
        controller.step(-1)
        assert controller.current_record.reference == 1
        assert controller.status == "Fault: Page 1 loaded into Frame 0"

    def test_back_clamps_at_start(self, controller) -> None:
        controller.step(-1)
        controller.step(-1)
        assert controller.current_step == -1
        assert not controller.can_step_back

    def test_forward_clamps_at_end(self, controller) -> None:
        controller.play()
        for _ in range(len(REFS) + 2):
            controller.step(1)
        assert controller.current_step == len(REFS) - 1
        assert not controller.playing
        assert controller.status.startswith("SIMULATION_COMPLETE")
        assert not controller.can_step_forward
        assert not controller.can_play

    def test_scrub_back_reuses_records(self, controller) -> None:
        for _ in range(4):
            controller.step(1)
        forward = controller.current_record
        controller.step(-1)
        controller.step(1)
        assert controller.current_record is forward


class TestPlayback:
    def test_toggle(self, controller) -> None:
        controller.toggle()
        assert controller.playing
        controller.toggle()
        assert not controller.playing

    def test_advance_stops_at_end(self, controller) -> None:
        controller.play()
        ticks = 0
        while controller.playing:
            controller.advance()
            ticks += 1
        assert ticks == len(REFS)
        assert controller.at_end

    def test_play_at_end_restarts(self, controller) -> None:
        for _ in range(len(REFS)):
            controller.step(1)
        controller.play()
        assert controller.current_step == -1
        assert controller.playing

    @pytest.mark.parametrize("value, delay", [(100, 2000), (1000, 1100), (2000, 100), (5000, 100)])
    def test_speed_mapping(self, controller, value, delay) -> None:
        controller.set_speed(value)
        assert controller.speed_ms == delay


class TestQueries:
    def test_stats_follow_cursor(self, controller) -> None:
        for _ in range(3):
            controller.step(1)
        stats = controller.stats()
        assert stats["hits"] == 1
        assert stats["faults"] == 2
        assert stats["hit_ratio"] == pytest.approx(100 / 3)

    def test_event_log(self, controller) -> None:
        assert controller.event_log() == []
        controller.step(1)
        controller.step(1)
        controller.step(1)
        assert controller.event_log() == [
            "Fault: Page 1 loaded into Frame 0",
            "Fault: Page 2 loaded into Frame 1",
            "Hit: Page 1 in Frame 0",
        ]

    def test_export_name(self, controller) -> None:
        controller.step(1)
        controller.step(1)
        assert controller.export_name() == "OS_SIMULATION_FIFO_STEP2"
