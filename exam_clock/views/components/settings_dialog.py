"""
views/components/settings_dialog.py

설정 모달. 현재 설정을 폼에 채워 보여주고,
저장 시 새 설정 스냅샷을 적용한 뒤 URL 파라미터를 정규형으로 갱신한다.
"""

from __future__ import annotations

from datetime import time
from typing import Optional, Union

import streamlit as st

from exam_clock.models.policy_config import ClockSettings
from exam_clock.services.presentation_loop import PresentationLoop
from exam_clock.services.query_params import apply_settings_form, settings_to_params


def save_settings(
    loop: PresentationLoop,
    *,
    start: Union[str, time, None],
    interval: Union[str, int, None],
    duration: Union[str, int, None],
    show: Optional[bool],
) -> ClockSettings:
    """
    폼 값을 적용하고 URL 파라미터를 정규형으로 다시 쓴다 (새로고침 없음).

    전체 화면이 곧바로 다시 그려지므로 루프에는 스냅샷만 교체한다.
    """
    updated = apply_settings_form(
        loop.settings,
        start=start,
        interval=interval,
        duration=duration,
        show=show,
    )
    loop.apply(updated, refresh=False)
    st.query_params.from_dict(settings_to_params(updated))
    return updated


def render_form(loop: PresentationLoop) -> None:
    """설정 폼 렌더링. 저장/취소 모두 st.rerun()으로 닫는다."""
    current = loop.settings
    policy = current.policy

    start_value = (
        time(policy.start_instant.hour, policy.start_instant.minute)
        if policy.start_instant is not None
        else None
    )

    start = st.time_input("Starttijd examen", value=start_value, step=60)
    interval = st.number_input(
        "Afgifte-interval (minuten)",
        min_value=1,
        step=1,
        value=policy.interval_minutes,
    )
    duration = st.number_input(
        "Duur afgeefmoment (minuten)",
        min_value=1,
        step=1,
        value=policy.window_minutes,
    )
    show = st.toggle("Statusbalk tonen", value=current.show_status)

    col_cancel, col_save = st.columns(2)
    with col_cancel:
        if st.button("Annuleren", key="settings_cancel", use_container_width=True):
            st.rerun()
    with col_save:
        if st.button("Opslaan", key="settings_save", type="primary", use_container_width=True):
            save_settings(
                loop,
                start=start,
                interval=int(interval),
                duration=int(duration),
                show=show,
            )
            st.rerun()


open_dialog = st.dialog("Instellingen")(render_form)
