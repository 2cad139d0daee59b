from __future__ import annotations
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# helpers
from playground.config.env_utils import env_bool, env_float, env_list, env_path


# ─────────────────────────────────────────────────────────
# Project root 탐색
#   - .git / pyproject.toml 중 하나가 보이는 최상단을 루트로 간주
#   - 실패 시 BASE_DIR 환경변수 → 패키지 상위 폴더
# ─────────────────────────────────────────────────────────
def find_project_root() -> Path:
    cur = Path(__file__).resolve()
    for parent in cur.parents:
        if any((parent / m).exists() for m in (".git", "pyproject.toml")):
            return parent
    env_root = os.getenv("BASE_DIR")
    if env_root:
        return Path(env_root).resolve()
    # site-packages 설치본 등: playground/ 의 상위
    return cur.parents[2]


ROOT: Path = find_project_root()

# ─────────────────────────────────────────────────────────
# .env 로딩
#   - ENV_FILE 지정 시 우선
#   - 없으면 ROOT/.env.<ENV> → 없으면 ROOT/.env
# ─────────────────────────────────────────────────────────
_DEFAULT_ENV = os.getenv("ENV", "test")
_env_file_candidate = ROOT / f".env.{_DEFAULT_ENV}"
_ENV_FILE = (
    Path(os.getenv("ENV_FILE")).resolve()
    if os.getenv("ENV_FILE")
    else (_env_file_candidate if _env_file_candidate.exists() else (ROOT / ".env"))
)
load_dotenv(dotenv_path=_ENV_FILE, override=False)


class Settings:
    # ── App / Runtime ─────────────────────────────────────
    ENV: str = os.getenv("ENV", _DEFAULT_ENV)
    FASTAPI_PORT: int = int(os.getenv("FASTAPI_PORT", 8000))
    DEBUG_MODE: bool = env_bool("DEBUG_MODE", False)
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # 설정 시에만 X-Internal-Api-Key 헤더 검사
    INTERNAL_API_KEY: Optional[str] = os.getenv("INTERNAL_API_KEY") or None

    # ── Base Paths ────────────────────────────────────────
    ROOT: Path = ROOT
    FIXTURES_DIR: Path = env_path("FIXTURES_DIR", ROOT / "fixtures")

    # ── Session store ─────────────────────────────────────
    MAX_SESSIONS: int = int(os.getenv("MAX_SESSIONS", 64))
    EXPERIMENT_KINDS = env_list(
        "EXPERIMENT_KINDS",
        [
            "mindfulness", "rhythm", "yoga", "posture", "red_light", "head_cursor",
            "face_chomp", "body_creature",
        ],
    )

    # ── Mindfulness ───────────────────────────────────────
    MINDFULNESS_TARGET_DURATION: float = env_float("MINDFULNESS_TARGET_DURATION", 10.0)
    # 정규화 이미지 좌표 기준 (16단위 캔버스에서 0.015 ≈ 0.001)
    MINDFULNESS_STILLNESS_THRESHOLD: float = env_float(
        "MINDFULNESS_STILLNESS_THRESHOLD", 0.001
    )
    MINDFULNESS_NOSE_SMOOTH: float = env_float("MINDFULNESS_NOSE_SMOOTH", 0.8)
    # 눈 감은 채 움직일 때: (초과 이동량 × scale × dt) 만큼 감소
    MINDFULNESS_MOTION_DECAY_SCALE: float = env_float(
        "MINDFULNESS_MOTION_DECAY_SCALE", 600.0
    )
    # 눈 뜬 동안 초당 감소량
    MINDFULNESS_OPEN_EYES_DECAY_RATE: float = env_float(
        "MINDFULNESS_OPEN_EYES_DECAY_RATE", 1.5
    )
    MINDFULNESS_POLICY: str = os.getenv("MINDFULNESS_POLICY", "decay")  # "decay" | "reset"

    # ── Rhythm ────────────────────────────────────────────
    RHYTHM_BPM: float = env_float("RHYTHM_BPM", 120.0)
    RHYTHM_TRAVEL_TIME: float = env_float("RHYTHM_TRAVEL_TIME", 8.0)
    RHYTHM_HIT_WINDOW: float = env_float("RHYTHM_HIT_WINDOW", 0.5)
    RHYTHM_SMOOTH: float = env_float("RHYTHM_SMOOTH", 0.6)

    # ── Posture ───────────────────────────────────────────
    POSTURE_CALIBRATE_HOLD: float = env_float("POSTURE_CALIBRATE_HOLD", 1.5)
    POSTURE_ALERT_DRIFT: float = env_float("POSTURE_ALERT_DRIFT", 0.3)


# 전역 싱글톤처럼 사용
settings = Settings()
