"""
views/components/status_bar.py

제출 상태 표시줄 컴포넌트.
상태값(not-started / waiting / can-submit)을 그대로 CSS 클래스로 사용한다.
"""

import html

import streamlit as st

from exam_clock.models.exam_status import ExamStatus


def render(status: ExamStatus, visible: bool) -> None:
    """
    상태 표시줄 렌더링.

    Args:
        status:  이번 틱의 판정 결과
        visible: False이면 아무것도 그리지 않는다 (설정에서 숨김)
    """
    if not visible:
        return

    st.markdown(
        f'<div class="status-bar {status.state.value}">{html.escape(status.message)}</div>',
        unsafe_allow_html=True,
    )
