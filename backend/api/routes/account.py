"""
Account endpoints outside ``/auth``.

Subscription upgrades, credit purchases and self-service data deletion.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from shared.exceptions import ValidationError
from modules.accounts.models import (
    Account,
    EmailRequest,
    PurchaseRequest,
    UpgradeRequest,
)
from modules.accounts.service import AccountService

from ..dependencies import get_account_service
from ..middleware.auth import get_current_account

router = APIRouter()


class CreditsResponse(BaseModel):
    success: bool
    message: str
    aiCredits: int


class DeletionResponse(BaseModel):
    success: bool
    message: str


@router.post("/subscription/upgrade", response_model=CreditsResponse)
async def upgrade_subscription(
    body: UpgradeRequest,
    account: Account = Depends(get_current_account),
    accounts: AccountService = Depends(get_account_service),
) -> CreditsResponse:
    """Move to premium or full. Full adds bonus AI credits."""
    updated = await accounts.upgrade_subscription(account.id, body.plan)
    return CreditsResponse(
        success=True,
        message="Subscription upgraded",
        aiCredits=updated.ai_credits,
    )


@router.post("/credits/purchase", response_model=CreditsResponse)
async def purchase_credits(
    body: PurchaseRequest,
    account: Account = Depends(get_current_account),
    accounts: AccountService = Depends(get_account_service),
) -> CreditsResponse:
    updated = await accounts.purchase_credits(account.id, body.credits, body.price)
    return CreditsResponse(
        success=True,
        message="Credits purchased",
        aiCredits=updated.ai_credits,
    )


@router.post("/delete-my-data", response_model=DeletionResponse)
async def delete_my_data(
    body: EmailRequest,
    accounts: AccountService = Depends(get_account_service),
) -> DeletionResponse:
    """
    Delete the account registered under an email address.

    Answers success whether or not an account matched.
    """
    if not body.email:
        raise ValidationError("Email required", code="EMAIL_REQUIRED")

    if await accounts.delete_by_email(body.email):
        return DeletionResponse(
            success=True, message="Your data has been deleted successfully."
        )
    return DeletionResponse(
        success=True, message="No account found with that email address."
    )
