"""Shared fixtures: an app wired to in-memory collaborators."""

import os

# Keep test runs from writing a log file or picking up a developer's services
os.environ["LOG_FILE"] = os.devnull
os.environ["STORAGE_BACKEND"] = "memory"

from datetime import datetime, timedelta

import boto3
import pytest
from fastapi.testclient import TestClient

from src.database import init_db, make_engine, make_session_factory
from src.main import create_app
from src.object_storage import ObjectStorageService
from src.schemas import BlogPostCreate
from src.storage import DatabaseStorage, MemStorage

ADMIN_PASSWORD = "s3cret"
SITE_URL = "https://example.com"
BUCKET = "test-bucket"


class TickingClock:
    """Clock that moves one minute forward on every read."""

    def __init__(self, start=datetime(2025, 1, 1, 12, 0)):
        self.now = start

    def __call__(self):
        self.now += timedelta(minutes=1)
        return self.now


class FakeMailer:
    def __init__(self, error=None):
        self.sent = []
        self.error = error

    async def send_contact_message(self, contact):
        if self.error:
            raise self.error
        self.sent.append(contact)


def make_post_data(title="A post", content="Some words here", **overrides):
    return BlogPostCreate(title=title, content=content, **overrides)


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def storage(clock):
    return MemStorage(seed=False, clock=clock)


@pytest.fixture(params=["memory", "database"])
def any_storage(request, clock):
    """Each content store backend, empty."""
    if request.param == "memory":
        return MemStorage(seed=False, clock=clock)
    engine = make_engine("sqlite://")
    init_db(engine)
    return DatabaseStorage(make_session_factory(engine), seed=False, clock=clock)


@pytest.fixture
def s3_client():
    return boto3.client(
        "s3",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


@pytest.fixture
def object_storage(s3_client):
    return ObjectStorageService(bucket_name=BUCKET, private_dir=".private", client=s3_client)


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def app(storage, object_storage, mailer):
    return create_app(
        storage=storage,
        object_storage=object_storage,
        mailer=mailer,
        admin_password=ADMIN_PASSWORD,
        site_url=SITE_URL,
    )


@pytest.fixture
def client(app):
    return TestClient(app)
