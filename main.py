"""
main.py — 제출 시계 앱 진입점

  python main.py                      화면(Streamlit) + API(uvicorn) 실행 후 브라우저 열기
  python main.py --console "start=09:00&interval=10"
                                      터미널에 매초 상태 출력
"""

import argparse
import os
import socket
import subprocess
import sys
import time
import threading
import logging
import traceback
import webbrowser
from datetime import datetime
from urllib.parse import parse_qsl

# ── 패키지 경로 설정 (반드시 최상단) ──────────────────────────────────────────
_BASE_DIR = os.path.dirname(os.path.abspath(__file__))
if _BASE_DIR not in sys.path:
    sys.path.insert(0, _BASE_DIR)

from config import BASE_DIR, LOG_FILE, DEFAULT_HOST, API_PORT, UI_PORT, UI_SCRIPT, DEFAULT_TIMEOUT

# ── 로깅 설정 ────────────────────────────────────────────────────────────────
try:
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        handlers=[
            logging.FileHandler(LOG_FILE, encoding='utf-8'),
            logging.StreamHandler(sys.stdout)
        ]
    )
except PermissionError:
    # 로그 파일 점유 시 콘솔 출력만 사용
    logging.basicConfig(level=logging.INFO)

logger = logging.getLogger(__name__)

# ── 서버 및 네트워크 유틸 ───────────────────────────────────────────────────

def _find_free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind((DEFAULT_HOST, 0))
        return s.getsockname()[1]

def _wait_for_server(port: int, timeout: float = DEFAULT_TIMEOUT) -> bool:
    deadline = time.time() + timeout
    while time.time() < deadline:
        try:
            with socket.create_connection((DEFAULT_HOST, port), timeout=0.5):
                return True
        except OSError:
            time.sleep(0.1)
    return False

def _start_api(port: int) -> None:
    try:
        import uvicorn
        from api.app import create_app
        logger.info(f"API 서버 시작 - Port: {port}")
        app = create_app()
        uvicorn.run(app, host=DEFAULT_HOST, port=port, log_level="error")
    except Exception:
        logger.error(f"API 서버 오류 발생:\n{traceback.format_exc()}")

def _start_ui(port: int) -> subprocess.Popen:
    cmd = [
        sys.executable, "-m", "streamlit", "run", UI_SCRIPT,
        "--server.address", DEFAULT_HOST,
        "--server.port", str(port),
        "--server.headless", "true",
        "--browser.gatherUsageStats", "false",
    ]
    logger.info(f"화면 서버 시작 - Port: {port}")
    return subprocess.Popen(cmd, cwd=BASE_DIR)

# ── 콘솔 모드 ────────────────────────────────────────────────────────────────

def _run_console(query: str) -> None:
    from exam_clock.services.presentation_loop import PresentationLoop
    from exam_clock.services.query_params import settings_from_params, to_query_string
    from exam_clock.views.components.datetime_display import format_datetime_nl

    settings = settings_from_params(dict(parse_qsl(query.lstrip("?"))))
    logger.info(f"콘솔 모드 - 설정: {to_query_string(settings)}")

    def _print_tick(now: datetime, status, settings) -> None:
        line = format_datetime_nl(now)
        if settings.show_status:
            line += f"  |  {status.message}"
        print(f"\r{line:<80}", end="", flush=True)

    stop_event = threading.Event()
    loop = PresentationLoop(settings, _print_tick)
    try:
        loop.run(stop_event)
    except KeyboardInterrupt:
        stop_event.set()
        print()
        logger.info("사용자에 의해 종료되었습니다.")

# ── 메인 실행 ────────────────────────────────────────────────────────────────

def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="시험 제출 시계")
    parser.add_argument(
        "--console",
        nargs="?",
        const="show=1",
        metavar="QUERY",
        help="터미널 모드. URL 쿼리 문자열 형식의 설정 (예: start=09:00&interval=10&show=1)",
    )
    parser.add_argument("--no-api", action="store_true", help="API 서버를 띄우지 않음")
    parser.add_argument("--no-browser", action="store_true", help="브라우저를 열지 않음")
    return parser.parse_args(argv)


if __name__ == "__main__":
    args = _parse_args()
    os.chdir(BASE_DIR)

    if args.console is not None:
        _run_console(args.console)
        sys.exit(0)

    logger.info("=== Exam Submission Clock Started ===")

    if not args.no_api:
        api_thread = threading.Thread(target=_start_api, args=(API_PORT,), daemon=True)
        api_thread.start()

    ui_port = UI_PORT or _find_free_port()
    ui_process = _start_ui(ui_port)

    if not _wait_for_server(ui_port):
        logger.error("화면 서버 시작 제한 시간을 초과했습니다.")
        ui_process.terminate()
        sys.exit(1)

    url = f"http://{DEFAULT_HOST}:{ui_port}"
    logger.info(f"서버 준비 완료: {url}")
    if not args.no_browser:
        webbrowser.open(url)

    # 메인 스레드 유지
    try:
        ui_process.wait()
    except KeyboardInterrupt:
        logger.info("사용자에 의해 종료되었습니다.")
        ui_process.terminate()
