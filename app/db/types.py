"""Custom database column types for cross-database compatibility."""
from __future__ import annotations

import json
from typing import Any

from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.types import Text, TypeDecorator


class JSONDocument(TypeDecorator):
    """Persist a JSON value as JSONB on PostgreSQL and as text elsewhere."""

    impl = Text
    cache_ok = True

    def load_dialect_impl(self, dialect):  # type: ignore[override]
        if dialect.name == "postgresql":
            return dialect.type_descriptor(JSONB())
        return dialect.type_descriptor(Text())

    def process_bind_param(self, value: Any, dialect):  # type: ignore[override]
        if value is None:
            return None
        if dialect.name == "postgresql":
            return value
        return json.dumps(value)

    def process_result_value(self, value: Any, dialect):  # type: ignore[override]
        if value is None:
            return self._empty()
        if dialect.name == "postgresql" or not isinstance(value, str):
            return value
        return json.loads(value)

    def _empty(self) -> Any:
        return None


class JSONObject(JSONDocument):
    """JSON object column that reads back ``{}`` instead of ``None``."""

    cache_ok = True

    def _empty(self) -> Any:
        return {}


class StringList(JSONDocument):
    """Ordered list of strings that reads back ``[]`` instead of ``None``."""

    cache_ok = True

    def _empty(self) -> Any:
        return []
