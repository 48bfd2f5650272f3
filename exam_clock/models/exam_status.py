from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SubmissionState(str, Enum):
    """제출 가능 상태. 값은 상태 표시줄의 CSS 클래스명으로도 쓰인다."""

    NOT_STARTED = "not-started"
    WAITING = "waiting"
    CAN_SUBMIT = "can-submit"


class ExamStatus(BaseModel):
    """
    한 시점에 대한 판정 결과.
    매 틱마다 새로 만들어지고 이전 결과는 보관하지 않는다.
    """

    model_config = ConfigDict(frozen=True)

    state: SubmissionState
    message: str = Field(..., min_length=1)
    minutes_remaining: Optional[int] = Field(
        default=None,
        ge=1,
        description="대기 중일 때 다음 제출 시점까지 남은 분 (올림)"
    )
