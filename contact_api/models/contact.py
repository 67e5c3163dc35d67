from pydantic import BaseModel, ConfigDict, StrictStr
from typing import Optional


class ContactFormData(BaseModel):
    """Raw contact form body. Fields may be missing or blank, but never non-text."""
    name: Optional[StrictStr] = None
    email: Optional[StrictStr] = None
    phone: Optional[StrictStr] = None
    message: Optional[StrictStr] = None


class ContactSubmission(BaseModel):
    """A validated, trimmed submission ready to forward and store"""
    model_config = ConfigDict(frozen=True)

    name: str
    email: str
    phone: str
    message: str
