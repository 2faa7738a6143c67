# backend/app/api/tutorial_api.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from app.core.tutorial import (
    TutorialNotFound,
    TutorialService,
    TutorialValidationError,
    build_service,
)
from app.models.tutorial import MutationResult, Tutorial, TutorialCreate, TutorialUpdate

logger = logging.getLogger("uvicorn.error")

router = APIRouter(prefix="/api/tutorials", tags=["Tutorial"])

_service: Optional[TutorialService] = None


def get_tutorial_service() -> TutorialService:
    global _service
    if _service is None:
        _service = build_service()
        logger.info("Tutorial store at %s", _service.repository.root)
    return _service


@router.post("", response_model=Tutorial, status_code=201)
def create_tutorial(payload: TutorialCreate, service: TutorialService = Depends(get_tutorial_service)):
    try:
        return service.create(payload)
    except TutorialValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.get("", response_model=List[Tutorial])
def list_tutorials(title: Optional[str] = None, service: TutorialService = Depends(get_tutorial_service)):
    """List tutorials, optionally only those whose title contains ``title``."""
    return service.get_all(title)


# declared before /{tutorial_id} so "published" is not taken as an id
@router.get("/published", response_model=List[Tutorial])
def list_published(service: TutorialService = Depends(get_tutorial_service)):
    return service.get_published()


@router.get("/{tutorial_id}", response_model=Tutorial)
def get_tutorial(tutorial_id: str, service: TutorialService = Depends(get_tutorial_service)):
    try:
        return service.get_one(tutorial_id)
    except TutorialNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.put("/{tutorial_id}", response_model=MutationResult)
def update_tutorial(
    tutorial_id: str,
    payload: TutorialUpdate,
    service: TutorialService = Depends(get_tutorial_service),
):
    try:
        count = service.update(tutorial_id, payload)
    except TutorialValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except TutorialNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return MutationResult(message="Tutorial was updated successfully.", count=count)


@router.delete("/{tutorial_id}", response_model=MutationResult)
def delete_tutorial(tutorial_id: str, service: TutorialService = Depends(get_tutorial_service)):
    try:
        count = service.delete(tutorial_id)
    except TutorialNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return MutationResult(message="Tutorial was deleted successfully!", count=count)


@router.delete("", response_model=MutationResult)
def delete_all_tutorials(service: TutorialService = Depends(get_tutorial_service)):
    count = service.delete_all()
    return MutationResult(message=f"{count} Tutorials were deleted successfully!", count=count)
