#run it with uvicorn contact_api.main:app --reload
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contact_api.api.v1.api_router import api_router
from contact_api.core.config import get_settings
import os
import httpx
from contextlib import asynccontextmanager
from dotenv import load_dotenv
import logging

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Load environment variables from .env file
load_dotenv()

@asynccontextmanager
async def lifespan(app: FastAPI):
    await startup_event(app)
    yield
    await shutdown_event(app)


app = FastAPI(title="Contact Form Backend", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Rejected malformed request to {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Invalid request body"})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {str(exc)}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"}
    )


@app.get("/api/health")
def health_check():
    """Health check endpoint."""
    return {
        "status": "ok",
        "env_vars": {
            "mongodb_url": bool(os.environ.get("MONGODB_URL") or os.environ.get("MONGO_URI")),
            "form2chat_api_key": bool(os.environ.get("FORM2CHAT_API_KEY")),
        },
    }


async def startup_event(app: FastAPI):
    """Connect MongoDB, ensure collections, and build the contact handler"""
    from contact_api.core.contact_handler import ContactSubmissionHandler
    from contact_api.core.notifier import Form2ChatNotifier
    from contact_api.db import mongo
    from contact_api.db.init_db import initialize_database
    from contact_api.db.record_store import MongoRecordStore

    settings = get_settings()
    db = mongo.connect(settings.effective_mongo_uri)

    logger.info("🚀 Starting database initialization...")
    try:
        if await initialize_database(db):
            logger.info("✅ Database initialization completed successfully")
        else:
            logger.warning("⚠️ Database initialization completed with warnings")
    except Exception as e:
        logger.error(f"❌ Database initialization failed: {str(e)}")
        # Continue startup even if DB init fails (for development)

    if not settings.form2chat_api_key:
        logger.warning("FORM2CHAT_API_KEY is not set; Form2Chat requests will be sent without a key")

    app.state.http_client = httpx.AsyncClient()
    notifier = Form2ChatNotifier(
        app.state.http_client,
        api_url=settings.form2chat_api_url,
        api_key=settings.form2chat_api_key,
        timeout=settings.form2chat_timeout
    )
    store = MongoRecordStore(db[settings.contact_collection])
    app.state.contact_handler = ContactSubmissionHandler(notifier, store)


async def shutdown_event(app: FastAPI):
    """Clean up resources on application shutdown"""
    from contact_api.db import mongo

    http_client = getattr(app.state, "http_client", None)
    if http_client is not None:
        await http_client.aclose()

    try:
        mongo.close()
    except Exception as e:
        logger.error(f"Error closing MongoDB connections: {str(e)}")


