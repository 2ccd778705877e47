"""Configuration settings for the fragments engine."""

import os
from common.constants import DEFAULT_BACKEND, DEFAULT_DATABASE_PATH, DEFAULT_PAYLOAD_PATH


STORAGE_BACKEND = os.environ.get("FRAGMENTS_BACKEND", DEFAULT_BACKEND).lower()

DATABASE_PATH = os.environ.get("FRAGMENTS_DATABASE_PATH", DEFAULT_DATABASE_PATH)

PAYLOAD_PATH = os.environ.get("FRAGMENTS_DATA_PATH", DEFAULT_PAYLOAD_PATH)
