"""
models/policy_config.py

시험 제출 정책 설정 모델.
Pydantic BaseModel 기반 불변(frozen) 스냅샷 — 설정 변경은 새 스냅샷 생성으로만 이루어진다.
UI 코드 없음.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from config import (
    DEFAULT_INTERVAL_MINUTES,
    DEFAULT_SHOW_STATUS,
    DEFAULT_WINDOW_MINUTES,
    INITIAL_WAIT_MINUTES,
)


class ExamPolicyConfig(BaseModel):
    """
    제출 정책 한 벌을 표현하는 모델.

    Attributes:
        start_instant:        시험 시작 시각. None이면 아직 설정되지 않음.
        initial_wait_minutes: 시작 후 첫 제출 가능 시점까지의 대기 시간 (분).
        interval_minutes:     제출 주기 한 바퀴의 길이 (분).
        window_minutes:       주기 시작부터 제출이 허용되는 시간 (분).
                              interval_minutes 이하라고 가정하지만 강제하지 않는다.
    """

    model_config = ConfigDict(frozen=True)

    start_instant: Optional[datetime] = Field(
        default=None,
        description="시험 시작 시각 (None이면 미설정)"
    )
    initial_wait_minutes: int = Field(
        default=INITIAL_WAIT_MINUTES,
        ge=0,
        description="첫 제출 가능 시점까지의 대기 시간 (분)"
    )
    interval_minutes: int = Field(
        default=DEFAULT_INTERVAL_MINUTES,
        gt=0,
        description="제출 주기 (분)"
    )
    window_minutes: int = Field(
        default=DEFAULT_WINDOW_MINUTES,
        gt=0,
        description="주기마다 제출 가능한 시간 (분)"
    )


class ClockSettings(BaseModel):
    """
    화면 전체 설정. URL 파라미터로 저장되는 단위.

    Attributes:
        policy:      제출 정책.
        show_status: 상태 표시줄 표시 여부.
    """

    model_config = ConfigDict(frozen=True)

    policy: ExamPolicyConfig = Field(default_factory=ExamPolicyConfig)
    show_status: bool = Field(
        default=DEFAULT_SHOW_STATUS,
        description="상태 표시줄 표시 여부"
    )
