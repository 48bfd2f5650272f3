"""
services/policy_clock.py

제출 가능 여부 판정 로직.
순수 Python 함수로 구성 — UI 코드, 전역 상태 변경 없음.

시간 계산은 UTC로 환산한 시각 간의 정수 마이크로초 단위로 수행한다.
모듈로/올림이 정확하므로 오래 켜 둔 화면도 시작 시각에서 새로 계산한 값과 항상 일치하고,
서머타임 전환이 끼어 있어도 실제 경과 시간을 센다.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from config import DISPLAY_TIMEZONE
from exam_clock.models.exam_status import ExamStatus, SubmissionState
from exam_clock.models.policy_config import ExamPolicyConfig

MSG_NOT_STARTED = "Examen nog niet gestart"
MSG_CAN_SUBMIT = "Je mag nu afgeven!"

_US_PER_MINUTE = 60 * 1_000_000
_ONE_US = timedelta(microseconds=1)


def local_now(tz_name: Optional[str] = None) -> datetime:
    """
    화면 기준 현재 시각.

    tz_name(또는 config.DISPLAY_TIMEZONE)이 지정되면 해당 시간대의 aware datetime,
    아니면 로컬 naive datetime을 반환한다 (naive는 시스템 로컬 시간으로 해석).
    시작 시각과 현재 시각은 반드시 같은 함수로 얻어야 비교가 가능하다.
    """
    tz_name = tz_name if tz_name is not None else DISPLAY_TIMEZONE
    if tz_name:
        return datetime.now(ZoneInfo(tz_name))
    return datetime.now()


def minutes_label(count: int) -> str:
    """1이면 단수(minuut), 그 외(0 포함)는 복수(minuten)."""
    return "minuut" if count == 1 else "minuten"


def waiting_message(minutes_remaining: int) -> str:
    return f"Volgende afgeefmoment over {minutes_remaining} {minutes_label(minutes_remaining)}"


def _as_utc(moment: datetime) -> datetime:
    """
    절대 시각(UTC)으로 환산.
    같은 tzinfo끼리의 뺄셈은 벽시계 차이만 계산하므로 항상 UTC로 바꾼 뒤 비교한다.
    naive 값은 시스템 로컬 시간으로 해석된다 (해당 날짜의 서머타임 규칙 적용).
    """
    return moment.astimezone(timezone.utc)


def _ceil_minutes(microseconds: int) -> int:
    return -(-microseconds // _US_PER_MINUTE)


def _waiting(remaining_us: int) -> ExamStatus:
    minutes = _ceil_minutes(remaining_us)
    return ExamStatus(
        state=SubmissionState.WAITING,
        message=waiting_message(minutes),
        minutes_remaining=minutes,
    )


def classify(config: ExamPolicyConfig, now: datetime) -> ExamStatus:
    """
    주어진 시각의 제출 상태를 판정한다.

    판정 순서:
      1. 시작 전(또는 시작 시각 미설정)   → NOT_STARTED
      2. 초기 대기 시간 이내              → WAITING (남은 분 올림)
      3. 주기 내 위치 < 제출 가능 시간    → CAN_SUBMIT
      4. 그 외                            → WAITING (다음 주기까지 남은 분 올림)

    경계 시각(초기 대기 종료, 각 주기 시작)은 제출 가능 쪽에 포함된다.
    제출 가능 구간은 매 주기 [0, window) 반개구간.

    Args:
        config: 판정 중 바뀌지 않는 정책 스냅샷.
        now:    판정할 시각. config.start_instant와 같은 시계(local_now)에서 얻은 값.

    Returns:
        ExamStatus. 예외를 던지지 않는다.
    """
    if config.start_instant is None:
        return ExamStatus(state=SubmissionState.NOT_STARTED, message=MSG_NOT_STARTED)

    start, now = _as_utc(config.start_instant), _as_utc(now)
    if now < start:
        return ExamStatus(state=SubmissionState.NOT_STARTED, message=MSG_NOT_STARTED)

    elapsed_us = (now - start) // _ONE_US
    wait_us = config.initial_wait_minutes * _US_PER_MINUTE

    if elapsed_us < wait_us:
        return _waiting(wait_us - elapsed_us)

    interval_us = config.interval_minutes * _US_PER_MINUTE
    # Python의 %는 제수의 부호를 따르므로 결과는 항상 [0, interval)
    cycle_position_us = (elapsed_us - wait_us) % interval_us

    if cycle_position_us < config.window_minutes * _US_PER_MINUTE:
        return ExamStatus(state=SubmissionState.CAN_SUBMIT, message=MSG_CAN_SUBMIT)

    return _waiting(interval_us - cycle_position_us)
