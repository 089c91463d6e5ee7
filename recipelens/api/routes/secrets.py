"""Secret presence check for the frontend's setup screen."""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from recipelens.config import settings
from recipelens.utils.exceptions import ValidationError
from recipelens.utils.validators import validate_secret_name

logger = logging.getLogger(__name__)
router = APIRouter(tags=["config"])


class CheckSecretRequest(BaseModel):
    secretName: Optional[str] = None


class SecretStatus(BaseModel):
    exists: bool
    message: str


@router.post("/check-secret", response_model=SecretStatus)
async def check_secret(body: CheckSecretRequest) -> SecretStatus:
    """
    Report whether an API key is configured. The value is never returned,
    and only the application's own API key names are answered.
    """
    try:
        secret_name = validate_secret_name(body.secretName)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": str(e)},
        ) from e

    exists = bool(settings.secrets.get(secret_name))
    if secret_name not in settings.secrets:
        logger.warning("Secret check for unknown name", extra={"secret_name": secret_name})

    return SecretStatus(
        exists=exists,
        message=f"{secret_name} is configured" if exists else f"{secret_name} is not configured",
    )
