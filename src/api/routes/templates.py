"""
Template library API endpoints.

POST   /templates                      - Save a message as a template.
GET    /templates                      - List the caller's templates.
GET    /templates/segments/{segment}   - List the caller's templates for one segment.
DELETE /templates/{template_id}        - Delete one of the caller's templates.

All endpoints are scoped to the identity resolved by get_current_user.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Request

from src.api.auth import CurrentUser, get_current_user
from src.api.errors import ErrorResponse, TemplateSaveError
from src.api.models.requests import CustomerSegment, SaveTemplateRequest
from src.api.models.responses import DeleteTemplateResponse, MessageTemplateResponse
from src.api.rate_limit import limiter
from src.config.settings import settings
from src.db import repository

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/templates",
    responses={401: {"model": ErrorResponse, "description": "Missing caller identity"}},
)


@router.post(
    "",
    response_model=MessageTemplateResponse,
    status_code=201,
    responses={500: {"model": ErrorResponse, "description": "Failed to save template"}},
)
@limiter.limit(settings.rate_limit_templates)
def save_template(
    request: Request,
    template: SaveTemplateRequest,
    user: CurrentUser = Depends(get_current_user),
) -> MessageTemplateResponse:
    data = template.model_dump(mode="json")
    data["is_public"] = False

    saved = repository.save_template(user.id, data)
    if saved is None:
        logger.warning(f"Template save failed for user {user.open_id}")
        raise TemplateSaveError()

    logger.info(f"Saved template {saved.id} for user {user.open_id}")
    return MessageTemplateResponse.model_validate(saved)


@router.get("", response_model=List[MessageTemplateResponse])
@limiter.limit(settings.rate_limit_templates)
def list_templates(
    request: Request, user: CurrentUser = Depends(get_current_user)
) -> List[MessageTemplateResponse]:
    templates = repository.get_user_templates(user.id)
    return [MessageTemplateResponse.model_validate(t) for t in templates]


@router.get("/segments/{segment}", response_model=List[MessageTemplateResponse])
@limiter.limit(settings.rate_limit_templates)
def list_templates_by_segment(
    request: Request,
    segment: CustomerSegment,
    user: CurrentUser = Depends(get_current_user),
) -> List[MessageTemplateResponse]:
    templates = repository.get_templates_by_segment(user.id, segment.value)
    return [MessageTemplateResponse.model_validate(t) for t in templates]


@router.delete("/{template_id}", response_model=DeleteTemplateResponse)
@limiter.limit(settings.rate_limit_templates)
def delete_template(
    request: Request,
    template_id: int,
    user: CurrentUser = Depends(get_current_user),
) -> DeleteTemplateResponse:
    """Delete a template. Templates owned by someone else are left alone (success=false)."""
    success = repository.delete_template(template_id, user.id)
    logger.info(f"Delete template {template_id} for user {user.open_id}: success={success}")
    return DeleteTemplateResponse(success=success)
