"""Contact router for the site's contact form."""

import logging
from typing import Optional
from fastapi import APIRouter, Depends

from src.dependencies import get_mailer
from src.mailer import ContactMailer
from src.schemas import ContactRequest, SuccessResponse

# Configure logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Contact"])


# POST /api/contact
@router.post("/contact", response_model=SuccessResponse)
async def submit_contact(contact: ContactRequest, mailer: Optional[ContactMailer] = Depends(get_mailer)):
    """
    Accept a contact form submission and relay it by email.

    Relay failures are logged and not reported to the sender; the response
    is a success whenever the form data is valid.

    Args:
        contact: Validated contact form data
        mailer: Email relay, None when not configured

    Returns:
        SuccessResponse: Always success for valid input
    """
    logger.info(f"Contact form submission from {contact.email}")

    if mailer is None:
        logger.warning(f"Email relay not configured, contact message from {contact.email} not sent")
        return SuccessResponse()

    try:
        await mailer.send_contact_message(contact)
    except Exception as e:
        logger.error(f"Failed to relay contact message from {contact.email}: {e}", exc_info=True)

    return SuccessResponse()
