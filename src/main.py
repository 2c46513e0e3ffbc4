"""Main FastAPI application for PersonalSiteAPI."""

import logging
from pathlib import Path
from typing import Optional
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from src import config
from src.mailer import ContactMailer, build_mailer
from src.object_storage import ObjectStorageService
from src.routers import admin, blog, contact, objects, sitemap
from src.storage import IStorage, build_storage

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(),
        logging.FileHandler(config.LOG_FILE)
    ]
)

logger = logging.getLogger(__name__)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Answer every request validation failure with 400 and the field errors."""
    logger.warning(f"Invalid request data for {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid request data", "errors": jsonable_encoder(exc.errors())},
    )


def default_object_storage() -> ObjectStorageService:
    return ObjectStorageService(
        bucket_name=config.S3_BUCKET,
        private_dir=config.S3_PRIVATE_DIR,
        region_name=config.AWS_REGION,
        endpoint_url=config.S3_ENDPOINT_URL,
        aws_access_key_id=config.AWS_ACCESS_KEY_ID,
        aws_secret_access_key=config.AWS_SECRET_ACCESS_KEY,
        cache_ttl=config.OBJECT_CACHE_TTL,
    )


def default_mailer() -> Optional[ContactMailer]:
    return build_mailer(
        username=config.MAIL_USERNAME,
        password=config.MAIL_PASSWORD,
        mail_from=config.MAIL_FROM,
        port=config.MAIL_PORT,
        server=config.MAIL_SERVER,
        starttls=config.MAIL_TLS,
        ssl_tls=config.MAIL_SSL,
        recipient=config.CONTACT_EMAIL_TO,
    )


def create_app(
    storage: Optional[IStorage] = None,
    object_storage: Optional[ObjectStorageService] = None,
    mailer: Optional[ContactMailer] = None,
    admin_password: Optional[str] = None,
    site_url: Optional[str] = None,
    client_dist: Optional[str] = None,
) -> FastAPI:
    """
    Build the application and the collaborators it owns.

    Anything not passed in is built from the environment configuration. The
    content store is created here, once, and reaches handlers only through
    dependencies.

    Returns:
        FastAPI: Configured application
    """
    app = FastAPI(
        title=config.NAME_APP,
        description="API for the personal portfolio and blog: posts, comments, uploads and contact form",
        version="1.0.0"
    )

    app.state.storage = storage or build_storage(config.STORAGE_BACKEND, config.DATABASE_URL)
    app.state.object_storage = object_storage or default_object_storage()
    app.state.mailer = mailer if mailer is not None else default_mailer()
    app.state.admin_password = admin_password or config.ADMIN_PASSWORD
    app.state.site_url = (site_url or config.SITE_URL).rstrip("/")

    if app.state.admin_password == config.DEFAULT_ADMIN_PASSWORD:
        logger.warning("ADMIN_PASSWORD not set, using the built-in default password")

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Configure CORS (adjust origins as needed)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(blog.router)
    app.include_router(objects.router)
    app.include_router(contact.router)
    app.include_router(admin.router)
    app.include_router(sitemap.router)

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    # Mount the prebuilt client last so API routes take precedence
    client_dist = client_dist or config.PATH_CLIENT_DIST
    if client_dist:
        client_path = Path(client_dist)
        if client_path.is_dir():
            app.mount("/", StaticFiles(directory=str(client_path), html=True), name="client")
            logger.info(f"Serving client build from {client_path}")
        else:
            logger.warning(f"Client build directory not found: {client_path}")

    logger.info(f"{config.NAME_APP} ready")
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
