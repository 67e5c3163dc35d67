"""
Contact form endpoints.

POST   /contact                         submit the contact form
GET    /contact/messages                list stored messages, newest first
DELETE /contact/messages/{message_id}   delete a stored message
"""

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse
import logging

from contact_api.core.contact_handler import ContactSubmissionHandler
from contact_api.core.errors import ContactValidationError, PersistenceError
from contact_api.models.contact import ContactFormData

router = APIRouter(prefix="/contact", tags=["Contact"])
logger = logging.getLogger(__name__)


def get_contact_handler(request: Request) -> ContactSubmissionHandler:
    """Handler built once at startup and kept on app.state"""
    return request.app.state.contact_handler


@router.post("", status_code=status.HTTP_201_CREATED)
async def send_contact_message(
    form: ContactFormData,
    handler: ContactSubmissionHandler = Depends(get_contact_handler)
):
    try:
        await handler.submit(form)
    except ContactValidationError as e:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": e.message})
    except PersistenceError as e:
        logger.error(f"Error saving contact message: {e.message}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to save message. Please try again."}
        )

    return {"message": "Message sent successfully."}


@router.get("/messages", status_code=status.HTTP_200_OK)
async def get_all_contacts(handler: ContactSubmissionHandler = Depends(get_contact_handler)):
    try:
        return await handler.list_all()
    except PersistenceError as e:
        logger.error(f"Error listing contact messages: {e.message}")
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": e.message})


@router.delete("/messages/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_contact(message_id: str, handler: ContactSubmissionHandler = Depends(get_contact_handler)):
    try:
        await handler.delete_by_id(message_id)
    except PersistenceError as e:
        logger.error(f"Error deleting contact message {message_id}: {e.message}")
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": e.message})

    return Response(status_code=status.HTTP_204_NO_CONTENT)
