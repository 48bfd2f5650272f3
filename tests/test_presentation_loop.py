"""PresentationLoop 테스트 — 가짜 시계와 기록용 렌더러 주입."""

import logging
import threading
from datetime import datetime, timedelta

import pytest

from exam_clock.models.exam_status import SubmissionState
from exam_clock.models.policy_config import ClockSettings, ExamPolicyConfig
from exam_clock.services.presentation_loop import PresentationLoop

START = datetime(2026, 10, 18, 9, 0)


# ---- 헬퍼 ----

class FakeClock:
    def __init__(self, now: datetime):
        self.now = now
        self.calls = 0

    def __call__(self) -> datetime:
        self.calls += 1
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class RecordingRenderer:
    def __init__(self):
        self.frames = []

    def __call__(self, now, status, settings) -> None:
        self.frames.append((now, status, settings))


def make_settings(**policy) -> ClockSettings:
    fields = dict(start_instant=START, interval_minutes=10, window_minutes=1)
    fields.update(policy)
    return ClockSettings(policy=ExamPolicyConfig(**fields), show_status=True)


def make_loop(now: datetime = START, **policy):
    clock = FakeClock(now)
    renderer = RecordingRenderer()
    loop = PresentationLoop(make_settings(**policy), renderer, clock=clock, period=0.01)
    return loop, clock, renderer


# ---- tick ----

class TestTick:
    def test_renders_classified_status(self):
        loop, _, renderer = make_loop(START + timedelta(minutes=30))
        status = loop.tick()
        assert status.state == SubmissionState.CAN_SUBMIT
        assert renderer.frames == [(START + timedelta(minutes=30), status, loop.settings)]

    def test_reads_clock_every_tick(self):
        loop, clock, renderer = make_loop()
        loop.tick()
        clock.advance(minutes=31)
        loop.tick()
        assert clock.calls == 2
        assert renderer.frames[0][1].minutes_remaining == 30
        assert renderer.frames[1][1].minutes_remaining == 9

    def test_renderer_error_propagates_from_tick(self):
        def broken(now, status, settings):
            raise RuntimeError("render failed")

        loop = PresentationLoop(make_settings(), broken, clock=FakeClock(START))
        with pytest.raises(RuntimeError):
            loop.tick()

    def test_rejects_non_positive_period(self):
        with pytest.raises(ValueError):
            PresentationLoop(make_settings(), RecordingRenderer(), period=0)


# ---- apply ----

class TestApply:
    def test_apply_renders_new_settings_immediately(self):
        loop, _, renderer = make_loop(START + timedelta(minutes=45))
        assert loop.tick().state == SubmissionState.WAITING

        new_settings = make_settings(start_instant=START + timedelta(minutes=15))
        status = loop.apply(new_settings)

        assert status.state == SubmissionState.CAN_SUBMIT
        assert renderer.frames[-1][2] is new_settings
        assert loop.settings is new_settings

    def test_apply_without_refresh(self):
        loop, _, renderer = make_loop()
        new_settings = make_settings(interval_minutes=5)
        assert loop.apply(new_settings, refresh=False) is None
        assert renderer.frames == []
        loop.tick()
        assert renderer.frames[-1][2] is new_settings


# ---- run ----

class TestRun:
    def test_runs_until_stopped(self):
        stop_event = threading.Event()
        ticks = []

        def render(now, status, settings):
            ticks.append(status)
            if len(ticks) >= 3:
                stop_event.set()

        loop = PresentationLoop(make_settings(), render, clock=FakeClock(START), period=0.01)
        thread = threading.Thread(target=loop.run, args=(stop_event,))
        thread.start()
        thread.join(timeout=5)

        assert not thread.is_alive()
        assert len(ticks) == 3

    def test_tick_errors_are_logged_and_loop_continues(self, caplog):
        stop_event = threading.Event()
        calls = []

        def flaky(now, status, settings):
            calls.append(now)
            if len(calls) == 1:
                raise RuntimeError("render failed")
            stop_event.set()

        loop = PresentationLoop(make_settings(), flaky, clock=FakeClock(START), period=0.01)
        with caplog.at_level(logging.ERROR):
            loop.run(stop_event)

        assert len(calls) == 2
        assert any("틱 처리 중 오류" in r.message for r in caplog.records)

    def test_stopped_before_start_does_not_tick(self):
        loop, _, renderer = make_loop()
        stop_event = threading.Event()
        stop_event.set()
        loop.run(stop_event)
        assert renderer.frames == []
