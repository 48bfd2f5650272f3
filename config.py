import os

# 기본 디렉토리 설정
BASE_DIR = os.path.dirname(os.path.abspath(__file__))

# 경로 설정
UI_SCRIPT = os.path.join(BASE_DIR, "streamlit_app.py")
LOG_FILE = os.path.join(BASE_DIR, "launch.log")

# 서버 설정
DEFAULT_HOST = os.getenv("HOST", "127.0.0.1")
API_PORT = int(os.getenv("API_PORT", "8000"))
UI_PORT = int(os.getenv("UI_PORT", "0"))   # 0이면 빈 포트 자동 선택
DEFAULT_TIMEOUT = 15.0

# 화면 갱신 주기 (초)
TICK_SECONDS = float(os.getenv("TICK_SECONDS", "1"))

# 시험 제출 정책 기본값 (분)
INITIAL_WAIT_MINUTES = 30      # 첫 제출 가능 시점까지 대기 시간 (URL로 노출하지 않음)
DEFAULT_INTERVAL_MINUTES = 10  # 제출 주기
DEFAULT_WINDOW_MINUTES = 1     # 주기마다 제출 가능한 시간
DEFAULT_SHOW_STATUS = False    # 상태 표시줄 기본 숨김

# 표시용 시간대 (IANA 이름). 비어 있으면 서버 로컬 시간 사용
DISPLAY_TIMEZONE = os.getenv("DISPLAY_TIMEZONE", "")
