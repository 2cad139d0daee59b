from fastapi import APIRouter, Depends, HTTPException, Response
import logging

from playground.common.dependencies import get_experiment_service, verify_api_key
from playground.schemas.experiment_dto import (
    CreateExperimentRequest,
    ExperimentListResponse,
    ExperimentSnapshot,
    FrameInput,
)
from playground.services.experiment_service import ExperimentService
from playground.services.session_store import SessionNotFoundError

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/experiments", tags=["Experiments"], dependencies=[Depends(verify_api_key)]
)


def _not_found(session_id: str) -> HTTPException:
    logger.warning(f"unknown session: {session_id}")
    return HTTPException(status_code=404, detail=f"세션 없음: {session_id}")


@router.post("", response_model=ExperimentSnapshot, status_code=201)
def create_session(
        req: CreateExperimentRequest,
        service: ExperimentService = Depends(get_experiment_service),
) -> ExperimentSnapshot:
    try:
        return service.create(req)
    except ValueError as e:
        logger.warning(f"rejected experiment options: {e}")
        raise HTTPException(status_code=422, detail=str(e))


@router.get("", response_model=ExperimentListResponse)
def list_sessions(service: ExperimentService = Depends(get_experiment_service)):
    return ExperimentListResponse(sessions=service.list())


@router.get("/{session_id}", response_model=ExperimentSnapshot)
def get_session(session_id: str, service: ExperimentService = Depends(get_experiment_service)):
    """상태 조회 (외부 폴링용)"""
    try:
        return service.get(session_id)
    except SessionNotFoundError:
        raise _not_found(session_id)


@router.post("/{session_id}/frames", response_model=ExperimentSnapshot)
def push_frame(
        session_id: str,
        frame: FrameInput,
        service: ExperimentService = Depends(get_experiment_service),
) -> ExperimentSnapshot:
    try:
        return service.push_frame(session_id, frame)
    except SessionNotFoundError:
        raise _not_found(session_id)


@router.post("/{session_id}/reset", response_model=ExperimentSnapshot)
def reset_session(session_id: str, service: ExperimentService = Depends(get_experiment_service)):
    try:
        return service.reset(session_id)
    except SessionNotFoundError:
        raise _not_found(session_id)


@router.post("/{session_id}/demo", response_model=ExperimentSnapshot)
def demo_session(session_id: str, service: ExperimentService = Depends(get_experiment_service)):
    try:
        return service.demo(session_id)
    except SessionNotFoundError:
        raise _not_found(session_id)


@router.delete("/{session_id}", status_code=204)
def delete_session(session_id: str, service: ExperimentService = Depends(get_experiment_service)):
    try:
        service.delete(session_id)
    except SessionNotFoundError:
        raise _not_found(session_id)
    return Response(status_code=204)


ROUTERS = [router]
