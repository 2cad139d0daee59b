"""
라우터 자동 등록
- playground/api 아래 각 모듈이 ROUTERS = [APIRouter, ...] 로 공개한 라우터만 등록
- ROUTERS 가 없는 모듈, '_' 로 시작하는 모듈은 건너뜀
"""
import importlib
import logging
import pkgutil
from typing import Iterator, List, Tuple

from fastapi import APIRouter, FastAPI

logger = logging.getLogger(__name__)


def discover_routers(package_name: str = __name__) -> Iterator[Tuple[str, APIRouter]]:
    """(모듈 이름, 라우터) 를 모듈 이름 순으로"""
    package = importlib.import_module(package_name)
    names = sorted(m.name for m in pkgutil.iter_modules(package.__path__) if not m.name.startswith("_"))
    for name in names:
        module = importlib.import_module(f"{package_name}.{name}")
        exported = getattr(module, "ROUTERS", None)
        if exported is None:
            logger.debug("api module %s has no ROUTERS, skipped", name)
            continue
        for router in exported:
            if not isinstance(router, APIRouter):
                raise TypeError(f"{package_name}.{name}.ROUTERS holds a non-router: {router!r}")
            yield name, router


def include_all_routers(app: FastAPI) -> List[str]:
    """발견한 라우터를 app 에 붙이고, 등록된 모듈 이름 목록 반환"""
    included: List[str] = []
    for name, router in discover_routers():
        app.include_router(router)
        if name not in included:
            included.append(name)
    logger.info("api routers included: %s", ", ".join(included))
    return included
