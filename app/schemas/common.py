"""Shared schema building blocks."""
from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator

from app.utils.dates import as_utc

# Rows read back from SQLite lose their offset; everything stored is UTC.
UTCDatetime = Annotated[datetime, AfterValidator(as_utc)]
