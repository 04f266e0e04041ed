from fastapi import APIRouter, Request

from app.auth_utils import get_config, require_user
from core.database import get_user_entitlement
from core.services.billing import construct_event, create_checkout_session, handle_billing_event

router = APIRouter()


@router.get("/billing/entitlement")
def billing_entitlement(request: Request):
    user = require_user(request)
    return get_user_entitlement(user["id"])


@router.post("/billing/checkout")
def billing_checkout(request: Request):
    user = require_user(request)
    return {"url": create_checkout_session(get_config(request), user)}


@router.post("/billing/webhook")
async def billing_webhook(request: Request):
    payload = await request.body()
    event = construct_event(get_config(request), payload, request.headers.get("stripe-signature"))
    handle_billing_event(event)
    return {"received": True}
