"""
views/components/datetime_display.py

상단 날짜·시각 한 줄. 벨기에 네덜란드어(nl-BE) 긴 형식으로 표시한다.
예: "zondag 18 oktober 2026 om 14:05:09"
"""

from datetime import datetime

import streamlit as st

_WEEKDAYS = (
    "maandag", "dinsdag", "woensdag", "donderdag", "vrijdag", "zaterdag", "zondag",
)
_MONTHS = (
    "januari", "februari", "maart", "april", "mei", "juni",
    "juli", "augustus", "september", "oktober", "november", "december",
)


def format_datetime_nl(now: datetime) -> str:
    weekday = _WEEKDAYS[now.weekday()]
    month = _MONTHS[now.month - 1]
    return f"{weekday} {now.day} {month} {now.year} om {now:%H:%M:%S}"


def render(now: datetime) -> None:
    st.markdown(
        f'<div class="clock-datetime">{format_datetime_nl(now)}</div>',
        unsafe_allow_html=True,
    )
