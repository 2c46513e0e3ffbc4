"""FastAPI dependencies resolving the collaborators built by create_app."""

from typing import Optional
from fastapi import Request

from src.mailer import ContactMailer
from src.object_storage import ObjectStorageService
from src.storage import IStorage


def get_storage(request: Request) -> IStorage:
    """Content store owned by the running application."""
    return request.app.state.storage


def get_object_storage(request: Request) -> ObjectStorageService:
    """Object storage adapter owned by the running application."""
    return request.app.state.object_storage


def get_mailer(request: Request) -> Optional[ContactMailer]:
    """Contact mailer, or None when the relay is not configured."""
    return request.app.state.mailer


def get_admin_password(request: Request) -> str:
    return request.app.state.admin_password


def get_site_url(request: Request) -> str:
    return request.app.state.site_url
