from fastapi import APIRouter
from contact_api.api.v1.endpoints import contact

api_router = APIRouter(prefix="/v1")

api_router.include_router(contact.router)
