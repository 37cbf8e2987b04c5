import logging
from fastapi import APIRouter, Depends, status

from app.core.dependencies import get_credential_issuer
from app.schemas.credentials import CredentialRequest, CredentialResponse
from app.services.credential_issuer import CredentialIssuer

router = APIRouter(tags=["credentials"])
logger = logging.getLogger(__name__)


@router.post("", response_model=CredentialResponse, status_code=status.HTTP_201_CREATED)
async def register_credential(
    credential_data: CredentialRequest,
    issuer: CredentialIssuer = Depends(get_credential_issuer)
):
    """Public endpoint that registers a caller and returns its new API key"""
    logger.info(f"Issuing API key for {credential_data.username}")
    api_key = issuer.issue(credential_data.name, credential_data.username, credential_data.password)
    return {"username": credential_data.username.strip(), "api_key": api_key}
