"""Configuration settings for the SkyBox server."""

import os

from common.constants import TOTAL_CAPACITY_BYTES


APPWRITE_ENDPOINT = os.environ.get("APPWRITE_ENDPOINT", "https://cloud.appwrite.io/v1").rstrip("/")

APPWRITE_PROJECT = os.environ.get("APPWRITE_PROJECT", "")

APPWRITE_DATABASE = os.environ.get("APPWRITE_DATABASE", "")

APPWRITE_USERS_COLLECTION = os.environ.get("APPWRITE_USERS_COLLECTION", "")

APPWRITE_FILES_COLLECTION = os.environ.get("APPWRITE_FILES_COLLECTION", "")

APPWRITE_BUCKET = os.environ.get("APPWRITE_BUCKET", "")

APPWRITE_SECRET_KEY = os.environ.get("APPWRITE_SECRET_KEY", "")

BACKEND_TIMEOUT_SECONDS = float(os.environ.get("BACKEND_TIMEOUT_SECONDS", "30"))

SKYBOX_HOST = os.environ.get("SKYBOX_HOST", "0.0.0.0")

SKYBOX_PORT = int(os.environ.get("SKYBOX_PORT", "8000"))

TOTAL_CAPACITY = int(os.environ.get("SKYBOX_TOTAL_CAPACITY_BYTES", str(TOTAL_CAPACITY_BYTES)))

MAX_UPLOAD_BYTES = int(os.environ.get("SKYBOX_MAX_UPLOAD_BYTES", str(50 * 1024 * 1024)))

COOKIE_SECURE = os.environ.get("SKYBOX_COOKIE_SECURE", "true").lower() == "true"

DEFAULT_AVATAR_URL = os.environ.get(
    "SKYBOX_DEFAULT_AVATAR_URL",
    "https://img.freepik.com/free-psd/3d-illustration-person-with-sunglasses_23-2149436188.jpg",
)
