"""Custom icon listing and submission endpoints."""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Request

from iconbadges.api import schemas
from iconbadges.api.dependencies.services import (
    get_icon_lookup,
    get_icon_store,
    get_submission_service,
)
from iconbadges.core.errors import IconNotFoundError
from iconbadges.services.icons import IconLookup, IconStore
from iconbadges.services.submissions import IconSubmissionService

router = APIRouter(prefix="/icons", tags=["icons"])

ERROR_RESPONSES = {
    400: {"model": schemas.ErrorResponse},
    404: {"model": schemas.ErrorResponse},
    409: {"model": schemas.ErrorResponse},
    414: {"model": schemas.ErrorResponse},
}


@router.get("", response_model=schemas.IconListResponse)
@router.get("/", response_model=schemas.IconListResponse, include_in_schema=False)
def list_icons(store: IconStore = Depends(get_icon_store)) -> schemas.IconListResponse:
    icons = [schemas.IconRecordSchema(**icon.as_dict()) for icon in store.list_icons()]
    return schemas.IconListResponse(icons=icons)


@router.get("/{slug}", response_model=schemas.IconRecordSchema, responses={404: ERROR_RESPONSES[404]})
def get_icon(slug: str, lookup: IconLookup = Depends(get_icon_lookup)) -> schemas.IconRecordSchema:
    icon = lookup.resolve(slug)
    if icon is None:
        raise IconNotFoundError(body={"slug": slug})
    return schemas.IconRecordSchema(**icon.as_dict())


@router.post("", response_model=schemas.SubmissionResponse, responses=ERROR_RESPONSES)
@router.post("/", response_model=schemas.SubmissionResponse, include_in_schema=False)
def post_icon(
    request: Request,
    payload: Any = Body(default=None),
    service: IconSubmissionService = Depends(get_submission_service),
) -> schemas.SubmissionResponse:
    submission = schemas.IconSubmission.from_payload(payload)
    created = service.submit(
        submission.slug,
        submission.type,
        submission.data,
        query=dict(request.query_params),
    )
    return schemas.SubmissionResponse(body=schemas.IconRecordSchema(**created.as_dict()))


__all__ = ["router"]
