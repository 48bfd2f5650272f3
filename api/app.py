"""
api/app.py — FastAPI 앱 인스턴스 + 요청 로깅 미들웨어
"""

import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from config import UI_PORT
from api.routes import router

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(title="Exam Submission Clock", docs_url=None, redoc_url=None)

    # CORS (다른 출처의 안내 화면에서도 조회 허용, 읽기 전용)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # 요청 로깅 미들웨어
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.debug(
            f"{request.method} {request.url.path} → {response.status_code} ({elapsed_ms:.1f}ms)"
        )
        return response

    app.include_router(router)

    # 루트 → 서비스 안내
    @app.get("/")
    async def serve_index():
        return {
            "service": "exam-submission-clock",
            "endpoints": ["/api/status", "/api/canonical"],
            "ui_port": UI_PORT or None,
        }

    return app
