"""
services/query_params.py

URL 쿼리 파라미터 ↔ ClockSettings 변환 및 설정 폼 적용.

파라미터 규약:
  start     HH:MM (24시간)   → 오늘 날짜의 해당 시각을 시작 시각으로
  interval  양의 정수        → 제출 주기 (분)
  duration  양의 정수        → 제출 가능 시간 (분)
  show      1 / true / 기타  → 상태 표시줄 표시 여부

형식·범위 검사에 실패한 값은 오류 없이 버리고 이전 값 또는 기본값을 유지한다 (필드 단위).
"""

import logging
import re
from datetime import datetime, time
from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import urlencode

from exam_clock.models.policy_config import ClockSettings, ExamPolicyConfig
from exam_clock.services.policy_clock import local_now

logger = logging.getLogger(__name__)

_START_RE = re.compile(r"(\d{1,2}):(\d{2})", re.ASCII)
_INT_PREFIX_RE = re.compile(r"\s*([+-]?\d+)", re.ASCII)
_TRUE_VALUES = ("1", "true")


# ── 개별 값 검사 ─────────────────────────────────────────────────────────────

def parse_start(value: Any) -> Optional[time]:
    """'H:MM' 또는 'HH:MM' → time. 범위 밖이거나 형식이 다르면 None."""
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    if not isinstance(value, str):
        return None
    match = _START_RE.fullmatch(value)
    if not match:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if not (0 <= hours < 24 and 0 <= minutes < 60):
        return None
    return time(hours, minutes)


def parse_positive_int(value: Any) -> Optional[int]:
    """
    양의 정수로 읽을 수 있으면 그 값, 아니면 None.

    문자열은 앞부분의 숫자만 읽는다 ("15min" → 15, "2.5" → 2).
    bool은 정수로 취급하지 않는다.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        number = value
    elif isinstance(value, str):
        match = _INT_PREFIX_RE.match(value)
        if not match:
            return None
        number = int(match.group(1))
    else:
        return None
    return number if number > 0 else None


def parse_show(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value) in _TRUE_VALUES


def start_on_date(start: time, now: Optional[datetime] = None) -> datetime:
    """now와 같은 날짜(및 시간대)의 start 시각. 초 이하는 0."""
    now = now or local_now()
    return now.replace(hour=start.hour, minute=start.minute, second=0, microsecond=0)


# ── URL → 설정 ──────────────────────────────────────────────────────────────

def parse_query_params(params: Mapping[str, Any]) -> Dict[str, Any]:
    """
    쿼리 파라미터 중 검사를 통과한 항목만 담은 dict를 반환한다.

    Returns:
        {"start": time, "interval": int, "duration": int, "show": bool} 중 유효한 키만.
    """
    parsed: Dict[str, Any] = {}

    if "start" in params:
        start = parse_start(params["start"])
        if start is not None:
            parsed["start"] = start
        else:
            logger.debug(f"start 파라미터 무시: {params['start']!r}")

    for key in ("interval", "duration"):
        if key in params:
            number = parse_positive_int(params[key])
            if number is not None:
                parsed[key] = number
            else:
                logger.debug(f"{key} 파라미터 무시: {params[key]!r}")

    if "show" in params:
        parsed["show"] = parse_show(params["show"])

    return parsed


def settings_from_params(
    params: Mapping[str, Any],
    now: Optional[datetime] = None,
) -> ClockSettings:
    """
    초기 로드용. 기본값 위에 유효한 파라미터만 덮어쓴 ClockSettings.
    start가 없으면 로드 시점(now)이 시작 시각이 된다.
    """
    now = now or local_now()
    parsed = parse_query_params(params)

    policy_fields: Dict[str, Any] = {
        "start_instant": start_on_date(parsed["start"], now) if "start" in parsed else now,
    }
    if "interval" in parsed:
        policy_fields["interval_minutes"] = parsed["interval"]
    if "duration" in parsed:
        policy_fields["window_minutes"] = parsed["duration"]

    settings_fields: Dict[str, Any] = {"policy": ExamPolicyConfig(**policy_fields)}
    if "show" in parsed:
        settings_fields["show_status"] = parsed["show"]
    return ClockSettings(**settings_fields)


# ── 설정 → URL ──────────────────────────────────────────────────────────────

def format_start(start: datetime) -> str:
    return f"{start.hour:02d}:{start.minute:02d}"


def settings_to_params(settings: ClockSettings) -> Dict[str, str]:
    """정규형 파라미터. start는 설정되어 있을 때만 포함."""
    policy = settings.policy
    params: Dict[str, str] = {}
    if policy.start_instant is not None:
        params["start"] = format_start(policy.start_instant)
    params["interval"] = str(policy.interval_minutes)
    params["duration"] = str(policy.window_minutes)
    params["show"] = "1" if settings.show_status else "0"
    return params


def to_query_string(settings: ClockSettings) -> str:
    return urlencode(settings_to_params(settings))


# ── 설정 폼 적용 ────────────────────────────────────────────────────────────

def apply_settings_form(
    current: ClockSettings,
    *,
    start: Union[str, time, None] = None,
    interval: Union[str, int, None] = None,
    duration: Union[str, int, None] = None,
    show: Optional[bool] = None,
    now: Optional[datetime] = None,
) -> ClockSettings:
    """
    설정 폼 저장. 새 ClockSettings 스냅샷을 반환한다 (current는 변경하지 않음).

    각 필드는 독립적으로 검사되며, 잘못된 값은 current의 값을 유지한다.
    None은 "변경 없음".
    """
    policy_update: Dict[str, Any] = {}

    if start is not None:
        start_time = parse_start(start)
        if start_time is not None:
            policy_update["start_instant"] = start_on_date(start_time, now)
        else:
            logger.debug(f"설정 폼 start 무시: {start!r}")

    for field, value in (("interval_minutes", interval), ("window_minutes", duration)):
        if value is None:
            continue
        number = parse_positive_int(value)
        if number is not None:
            policy_update[field] = number
        else:
            logger.debug(f"설정 폼 {field} 무시: {value!r}")

    settings_update: Dict[str, Any] = {
        "policy": current.policy.model_copy(update=policy_update),
    }
    if show is not None:
        settings_update["show_status"] = bool(show)

    updated = current.model_copy(update=settings_update)
    logger.info(f"설정 적용: {to_query_string(updated)}")
    return updated
