"""Environment configuration for PersonalSiteAPI."""

import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

NAME_APP = os.getenv("NAME_APP", "PersonalSiteAPI")

# Content store
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "memory").lower()
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./personal_site.db")

# Shared admin secret (placeholder gate, see src/auth.py)
DEFAULT_ADMIN_PASSWORD = "admin123"
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", DEFAULT_ADMIN_PASSWORD)

# Email relay for the contact form
MAIL_USERNAME = os.getenv("MAIL_USERNAME", "")
MAIL_PASSWORD = os.getenv("MAIL_PASSWORD", "")
MAIL_FROM = os.getenv("MAIL_FROM", "")
MAIL_PORT = int(os.getenv("MAIL_PORT", "587"))
MAIL_SERVER = os.getenv("MAIL_SERVER", "smtp.sendgrid.net")
MAIL_TLS = os.getenv("MAIL_TLS", "True").lower() == "true"
MAIL_SSL = os.getenv("MAIL_SSL", "False").lower() == "true"
CONTACT_EMAIL_TO = os.getenv("CONTACT_EMAIL_TO", MAIL_FROM)

# Object storage bucket
S3_BUCKET = os.getenv("S3_BUCKET", "personal-site-objects")
S3_PRIVATE_DIR = os.getenv("S3_PRIVATE_DIR", ".private").strip("/")
S3_ENDPOINT_URL = os.getenv("S3_ENDPOINT_URL") or None
AWS_REGION = os.getenv("AWS_REGION", "us-east-1")
AWS_ACCESS_KEY_ID = os.getenv("AWS_ACCESS_KEY_ID") or None
AWS_SECRET_ACCESS_KEY = os.getenv("AWS_SECRET_ACCESS_KEY") or None
OBJECT_CACHE_TTL = int(os.getenv("OBJECT_CACHE_TTL", "3600"))

# Public site
SITE_URL = os.getenv("SITE_URL", "https://alexshyaka.site").rstrip("/")
PATH_CLIENT_DIST = os.getenv("PATH_CLIENT_DIST")
CORS_ORIGINS = [
    origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
]

LOG_FILE = os.getenv("LOG_FILE", "personal_site_api.log")
