"""
views/clock_view.py — 제출 시계 화면

레이아웃:
  - 상단: 날짜·시각 + 설정 버튼
  - 메인: 제출 상태 표시줄 (설정에서 숨김 가능)

상태 관리:
  - st.session_state.clock_loop  (PresentationLoop, 브라우저 세션당 하나)
  - 초기 설정은 세션 최초 실행 시 st.query_params에서 한 번만 읽는다
  - 설정 저장 시 st.query_params를 정규형으로 다시 쓴다 (새로고침 없음)
"""

from __future__ import annotations

import logging
from datetime import datetime

import streamlit as st

from config import TICK_SECONDS
from exam_clock.models.exam_status import ExamStatus
from exam_clock.models.policy_config import ClockSettings
from exam_clock.services.presentation_loop import PresentationLoop
from exam_clock.services.query_params import settings_from_params
from exam_clock.views.components import datetime_display as dtd
from exam_clock.views.components import settings_dialog as dlg
from exam_clock.views.components import status_bar as bar

logger = logging.getLogger(__name__)

_CSS = """
<style>
.clock-datetime {
    font-size: 1.4rem; font-weight: 600; color: #1a1a2e;
    text-align: center; padding: 12px 0;
}
.status-bar {
    font-size: 1.6rem; font-weight: 700; text-align: center;
    padding: 18px; border-radius: 8px; color: white;
}
.status-bar.not-started { background: #6b7280; }
.status-bar.waiting     { background: #f59e0b; }
.status-bar.can-submit  { background: #16a34a; }
</style>
"""


def _render_tick(now: datetime, status: ExamStatus, settings: ClockSettings) -> None:
    dtd.render(now)
    bar.render(status, settings.show_status)


def _get_loop() -> PresentationLoop:
    """세션의 표시 루프. 없으면 현재 URL 파라미터로 생성."""
    if "clock_loop" not in st.session_state:
        settings = settings_from_params(st.query_params.to_dict())
        logger.info(f"세션 시작 - 파라미터: {st.query_params.to_dict()}")
        st.session_state.clock_loop = PresentationLoop(settings, _render_tick)
    return st.session_state.clock_loop


@st.fragment(run_every=TICK_SECONDS)
def _live_panel(loop: PresentationLoop) -> None:
    loop.tick()


def render() -> None:
    """시계 화면 렌더링."""
    st.markdown(_CSS, unsafe_allow_html=True)
    loop = _get_loop()

    # ── 헤더 ──────────────────────────────────────────────────────────────
    _, settings_col = st.columns([5, 1])
    with settings_col:
        if st.button("⚙ Instellingen", key="open_settings", use_container_width=True):
            dlg.open_dialog(loop)

    # ── 매초 갱신 영역 ────────────────────────────────────────────────────
    _live_panel(loop)
