"""
Portable column types.

PostgreSQL stores tag-like lists as ``VARCHAR[]`` and free-form documents as
``JSONB``; the in-memory SQLite mode falls back to plain JSON for both.
"""

from sqlalchemy import JSON, String
from sqlalchemy.dialects.postgresql import ARRAY, JSONB

StringArray = ARRAY(String).with_variant(JSON(), "sqlite")

JsonDocument = JSON().with_variant(JSONB(), "postgresql")
