from fastapi import Header, HTTPException
from typing import Optional
from playground.config.settings import settings
from playground.services.experiment_service import ExperimentService
from playground.services.service_factory import create_experiment_service
import logging

logger = logging.getLogger(__name__)


# API Key 인증 (INTERNAL_API_KEY 가 설정된 경우에만)
async def verify_api_key(
        x_internal_api_key: Optional[str] = Header(None, alias="X-Internal-Api-Key")
):
    expected = settings.INTERNAL_API_KEY
    if not expected:
        return True

    if x_internal_api_key is None:
        logger.warning("Missing X-Internal-Api-Key header")
        raise HTTPException(
            status_code=401,
            detail="Missing X-Internal-Api-Key header"
        )

    if x_internal_api_key != expected:
        logger.warning(f"Invalid API Key: {x_internal_api_key[:4]}...")
        raise HTTPException(
            status_code=401,
            detail="Invalid Internal API Key"
        )

    return True


def get_experiment_service() -> ExperimentService:
    """
    라우터에서 Depends 로 주입. 테스트는 app.dependency_overrides 로 교체.
    """
    return create_experiment_service()
