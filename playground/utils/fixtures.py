"""
landmark fixture 입출력
- <name>.landmarks.json        : world space {x,y,z} 33개 (분류기 회귀 테스트용)
- <name>.image-landmarks.json  : 0~1 정규화 {x,y,z,visibility} 33개
"""
import json
from pathlib import Path
from typing import Any, Iterable, List, Optional, Union

from playground.config.settings import settings
from playground.schemas.landmark_dto import ImageLandmark, Landmark

WORLD_SUFFIX = ".landmarks.json"
IMAGE_SUFFIX = ".image-landmarks.json"

PathLike = Union[str, Path]


def fixture_path(name: str, image: bool = False, base_dir: Optional[PathLike] = None) -> Path:
    base = Path(base_dir) if base_dir else settings.FIXTURES_DIR
    return base / f"{name}{IMAGE_SUFFIX if image else WORLD_SUFFIX}"


def _read_json(path: PathLike) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _write_json(path: PathLike, obj: Any) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with open(p, "w", encoding="utf-8") as f:
        json.dump(obj, f, ensure_ascii=False, indent=2)
        f.write("\n")
    return p


def load_landmarks(path: PathLike) -> List[Landmark]:
    """world landmarks fixture → Landmark 목록. 배열이 아니면 ValueError"""
    data = _read_json(path)
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON array of landmarks")
    return [Landmark(x=p["x"], y=p["y"], z=p.get("z", 0.0)) for p in data]


def load_image_landmarks(path: PathLike) -> List[ImageLandmark]:
    data = _read_json(path)
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON array of landmarks")
    return [ImageLandmark(**p) for p in data]


def dump_landmarks(path: PathLike, landmarks: Iterable[Any]) -> Path:
    """{x,y,z} 만 기록 (visibility 등 나머지 필드 제외)"""
    rows = []
    for lm in landmarks:
        d = lm.model_dump() if hasattr(lm, "model_dump") else dict(lm)
        rows.append({"x": d["x"], "y": d["y"], "z": d.get("z", 0.0)})
    return _write_json(path, rows)


def dump_image_landmarks(path: PathLike, landmarks: Iterable[Any]) -> Path:
    rows = []
    for lm in landmarks:
        item = lm if isinstance(lm, ImageLandmark) else ImageLandmark(**dict(lm))
        rows.append(item.model_dump())
    return _write_json(path, rows)


def list_fixtures(base_dir: Optional[PathLike] = None) -> List[str]:
    """world fixture 이름 목록 (정렬)"""
    base = Path(base_dir) if base_dir else settings.FIXTURES_DIR
    return sorted(
        p.name[: -len(WORLD_SUFFIX)]
        for p in base.glob(f"*{WORLD_SUFFIX}")
        if not p.name.endswith(IMAGE_SUFFIX)
    )
