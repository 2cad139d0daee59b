from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from playground.api import include_all_routers
from playground.config.settings import settings

# 앱 생성
app = FastAPI(debug=settings.DEBUG_MODE)

# 자동으로 playground/api/* 모듈을 스캔해 라우터 전부 등록
include_all_routers(app)

app.openapi = lambda: get_openapi(
    title="Pose Playground API",
    version="0.1.0",
    description="얼굴/포즈 landmark 기반 분류 + 실험 세션 API",
    routes=app.routes,
)

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("playground.main:app", host="0.0.0.0", port=settings.FASTAPI_PORT, reload=True)
