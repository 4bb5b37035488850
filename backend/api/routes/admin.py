"""Admin-only endpoints."""

import logging

from fastapi import APIRouter, Depends

from shared.exceptions import ValidationError
from modules.accounts.models import Account, EmailRequest
from modules.auth.models import StatusResponse

from ..dependencies import ServiceContainer, get_container
from ..middleware.auth import require_admin
from ..models.errors import AUTH_ERROR_RESPONSES

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/set-email", response_model=StatusResponse, responses=AUTH_ERROR_RESPONSES)
async def set_admin_email(
    body: EmailRequest,
    admin: Account = Depends(require_admin),
    container: ServiceContainer = Depends(get_container),
) -> StatusResponse:
    """Change the runtime admin contact address."""
    if not body.email:
        raise ValidationError("Email required", code="EMAIL_REQUIRED")

    container.admin_email = body.email
    logger.info(f"Admin {admin.id} set contact email to {body.email}")
    return StatusResponse(success=True, message=f"Admin email set to {body.email}")
