"""
services/presentation_loop.py

주기적으로 현재 시각을 읽어 제출 상태를 판정하고 렌더러에 넘기는 루프.

  설정 스냅샷 + 현재 시각 → classify() → ExamStatus → render()

판정 로직(policy_clock)과 분리되어 있으므로 타이머 없이도 tick() 단위로 테스트할 수 있다.
Streamlit 화면은 fragment(run_every=...)에서 tick()을, 콘솔 모드는 run()을 사용한다.
"""

import logging
import threading
import time
from datetime import datetime
from typing import Callable, Optional

from config import TICK_SECONDS
from exam_clock.models.exam_status import ExamStatus
from exam_clock.models.policy_config import ClockSettings
from exam_clock.services.policy_clock import classify, local_now

logger = logging.getLogger(__name__)

Renderer = Callable[[datetime, ExamStatus, ClockSettings], None]


class PresentationLoop:
    """
    설정 스냅샷을 보유하고 틱마다 판정·렌더링을 수행한다.

    Args:
        settings: 초기 설정.
        render:   render(now, status, settings) 콜백. 표시 방식은 호출 측이 결정.
        clock:    현재 시각 공급 함수 (기본 local_now). 매 틱 새로 호출된다.
        period:   run()의 틱 간격 (초).
    """

    def __init__(
        self,
        settings: ClockSettings,
        render: Renderer,
        clock: Callable[[], datetime] = local_now,
        period: float = TICK_SECONDS,
    ):
        if period <= 0:
            raise ValueError("period는 0보다 커야 합니다.")
        self._settings = settings
        self._render = render
        self._clock = clock
        self.period = period
        self._lock = threading.Lock()

    @property
    def settings(self) -> ClockSettings:
        with self._lock:
            return self._settings

    def tick(self) -> ExamStatus:
        """현재 설정과 현재 시각으로 한 번 판정하고 렌더링한다."""
        settings = self.settings
        now = self._clock()
        status = classify(settings.policy, now)
        self._render(now, status, settings)
        return status

    def apply(self, settings: ClockSettings, refresh: bool = True) -> Optional[ExamStatus]:
        """
        설정 스냅샷을 교체한다.

        refresh=True이면 즉시 tick()하여 이전 설정의 상태가 남지 않게 한다.
        호출 측이 곧바로 화면 전체를 다시 그리는 경우(Streamlit rerun)에는 False.
        """
        with self._lock:
            self._settings = settings
        return self.tick() if refresh else None

    def run(self, stop_event: threading.Event) -> None:
        """
        stop_event가 설정될 때까지 고정 주기로 tick()을 실행한다.

        마감 시각은 시작 시점 + k * period. 틱이 늦어져 지나간 마감은 건너뛴다
        (몰아서 실행하지 않음). 틱에서 발생한 예외는 기록하고 루프는 계속된다.
        """
        logger.info(f"표시 루프 시작 (주기 {self.period}초)")
        deadline = time.monotonic()
        while not stop_event.is_set():
            try:
                self.tick()
            except Exception:
                logger.exception("틱 처리 중 오류 발생")

            deadline += self.period
            now_mono = time.monotonic()
            if deadline <= now_mono:
                skipped = int((now_mono - deadline) // self.period) + 1
                deadline += skipped * self.period
            stop_event.wait(deadline - now_mono)
        logger.info("표시 루프 종료")
