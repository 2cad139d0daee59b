from fastapi import APIRouter

from playground.config.settings import settings

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check():
    return {"status": "ok", "env": settings.ENV}


ROUTERS = [router]
