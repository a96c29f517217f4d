"""Form intake routes: contact form and demo requests."""

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_intake_service
from src.api.models import (
    ContactMessageCreate,
    DemoRequestCreate,
    ErrorResponse,
    SubmissionResponse,
)
from src.domain.intake import IntakeService

router = APIRouter(tags=["intake"])

_ERRORS = {
    400: {"model": ErrorResponse, "description": "Invalid input"},
    500: {"model": ErrorResponse, "description": "Could not store the submission"},
}


@router.post(
    "/contact",
    response_model=SubmissionResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERRORS,
    summary="Submit the contact form",
)
def submit_contact(
    request_data: ContactMessageCreate,
    service: IntakeService = Depends(get_intake_service),
) -> SubmissionResponse:
    stored = service.submit_contact_message(
        name=request_data.name,
        email=request_data.email,
        message=request_data.message,
        phone=request_data.phone,
        subject=request_data.subject,
    )
    return SubmissionResponse(message="Message sent successfully.", id=stored.id)


@router.post(
    "/demo",
    response_model=SubmissionResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERRORS,
    summary="Request a product demo",
)
def submit_demo_request(
    request_data: DemoRequestCreate,
    service: IntakeService = Depends(get_intake_service),
) -> SubmissionResponse:
    stored = service.submit_demo_request(
        name=request_data.name,
        email=request_data.email,
        contact=request_data.contact,
        designation=request_data.designation,
    )
    return SubmissionResponse(message="Demo request submitted successfully.", id=stored.id)
