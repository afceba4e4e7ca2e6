"""
Contact form endpoint.
"""

from fastapi import APIRouter, Depends

from app.schemas.contact import ContactForm, MessageResponse
from app.schemas.error import get_error_responses
from app.services.notifier import ContactNotifier
from app.utils.dependencies import get_contact_notifier


router = APIRouter(tags=["Contact"])


@router.post(
    "/contactform",
    response_model=MessageResponse,
    summary="Submit contact form",
    description="Email the submission to the submitter and to the operator inbox.",
    responses=get_error_responses(400, 500)
)
async def submit_contact_form(
    form: ContactForm,
    notifier: ContactNotifier = Depends(get_contact_notifier)
):
    await notifier.notify(form)
    return {"message": "Form submitted successfully, email sent."}
