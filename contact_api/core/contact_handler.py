"""
Contact form workflow.

submit: validate -> forward to the notifier (best effort) -> insert into the
record store. The store is the system of record; only its failure fails the
request.
"""

import logging
import re
from typing import Any, Dict, List

from contact_api.core.errors import InvalidFormat, MissingField
from contact_api.models.contact import ContactFormData, ContactSubmission

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# Unicode white space and line terminators, including the BOM and excluding \x1c-\x1f
TRIM_CHARS = (
    "\t\n\x0b\x0c\r \xa0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006"
    "\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)

# Checked in this order; the first blank field wins
REQUIRED_FIELDS = [
    ("name", "Name is required"),
    ("email", "Email is required"),
    ("phone", "Phone number is required"),
    ("message", "Message is required"),
]


def validate_contact_data(form: ContactFormData) -> ContactSubmission:
    """
    Validate raw form data and return the trimmed submission.

    Raises:
        MissingField: a required field is absent or blank
        InvalidFormat: the email address is malformed
    """
    values = {}
    for field, error in REQUIRED_FIELDS:
        value = (getattr(form, field) or "").strip(TRIM_CHARS)
        if not value:
            raise MissingField(error)
        values[field] = value

    if not EMAIL_PATTERN.match(values["email"]):
        raise InvalidFormat("Please enter a valid email address")

    return ContactSubmission(**values)


class ContactSubmissionHandler:
    def __init__(self, notifier, store):
        self.notifier = notifier
        self.store = store

    async def submit(self, form: ContactFormData) -> str:
        """
        Validate, notify and store a contact form submission.

        Returns:
            str: The stored record id

        Raises:
            ContactValidationError: on invalid input, before any side effect
            PersistenceError: if the record store insert fails
        """
        submission = validate_contact_data(form)

        result = await self.notifier.notify(submission)
        if not result.delivered:
            logger.warning(f"Continuing without notifier delivery for {submission.email}")

        record_id = await self.store.insert(submission.model_dump())
        logger.info(f"Stored contact message {record_id} from {submission.email}")
        return record_id

    async def list_all(self) -> List[Dict[str, Any]]:
        return await self.store.list_all()

    async def delete_by_id(self, record_id: str) -> None:
        deleted = await self.store.delete_by_id(record_id)
        if deleted:
            logger.info(f"🗑️ Deleted contact message: {record_id}")
