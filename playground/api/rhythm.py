from fastapi import APIRouter, Query

from playground.domain.experiments.rhythm import PATTERN_LENGTH, get_arrow_direction

router = APIRouter(prefix="/rhythm", tags=["Rhythm"])


@router.get("/pattern")
def pattern(beat: int = Query(..., description="1부터 시작하는 박자 번호")):
    return {
        "beat": beat,
        "direction": get_arrow_direction(beat).value,
        "pattern_length": PATTERN_LENGTH,
    }


ROUTERS = [router]
