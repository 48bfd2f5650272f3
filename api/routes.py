"""
api/routes.py — FastAPI 엔드포인트

브라우저 화면과 같은 URL 파라미터(start / interval / duration / show)를 받아
제출 상태와 정규형 링크를 JSON으로 돌려준다. 잘못된 파라미터는 무시하고 기본값을 쓴다.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter

from exam_clock.models.policy_config import ClockSettings
from exam_clock.services.policy_clock import classify, local_now
from exam_clock.services.query_params import (
    settings_from_params,
    settings_to_params,
    to_query_string,
)

router = APIRouter()


# ── 헬퍼 ─────────────────────────────────────────────────────────────────────

def _collect(**raw: Optional[str]) -> dict[str, str]:
    """지정된 파라미터만 모은다 (None = URL에 없음)."""
    return {k: v for k, v in raw.items() if v is not None}


def _link(settings: ClockSettings) -> dict:
    return {
        "params": settings_to_params(settings),
        "query": to_query_string(settings),
    }


# ── 엔드포인트 ───────────────────────────────────────────────────────────────

@router.get("/api/status")
async def get_status(
    start: Optional[str] = None,
    interval: Optional[str] = None,
    duration: Optional[str] = None,
    show: Optional[str] = None,
    at: Optional[datetime] = None,
):
    now = at or local_now()
    settings = settings_from_params(
        _collect(start=start, interval=interval, duration=duration, show=show),
        now=now,
    )
    status = classify(settings.policy, now)
    return {
        "state": status.state.value,
        "message": status.message,
        "minutes_remaining": status.minutes_remaining,
        "show": settings.show_status,
        "now": now.isoformat(),
        **_link(settings),
    }


@router.get("/api/canonical")
async def get_canonical(
    start: Optional[str] = None,
    interval: Optional[str] = None,
    duration: Optional[str] = None,
    show: Optional[str] = None,
):
    settings = settings_from_params(
        _collect(start=start, interval=interval, duration=duration, show=show)
    )
    return _link(settings)
