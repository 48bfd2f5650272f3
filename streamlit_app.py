"""
streamlit_app.py — Streamlit 화면 진입점 (streamlit run streamlit_app.py)
"""

import os
import sys

# ── 패키지 경로 설정 (반드시 최상단) ──────────────────────────────────────────
_BASE_DIR = os.path.dirname(os.path.abspath(__file__))
if _BASE_DIR not in sys.path:
    sys.path.insert(0, _BASE_DIR)

import streamlit as st

from exam_clock.views import clock_view

st.set_page_config(page_title="Afgeefmomenten", page_icon="⏱", layout="centered")

clock_view.render()
