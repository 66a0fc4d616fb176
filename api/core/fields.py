"""
Bounded integer types matching the PostgreSQL column widths.

Out-of-range values fail request validation (400) instead of overflowing in
the driver.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Path
from pydantic import Field

INT4_MIN = -(2**31)
INT4_MAX = 2**31 - 1
BIGINT_MAX = 2**63 - 1

# bigserial primary keys / foreign keys in a request body.
RowId = Annotated[int, Field(ge=1, le=BIGINT_MAX)]

# `integer` columns.
Int4 = Annotated[int, Field(ge=INT4_MIN, le=INT4_MAX)]

# `{id}` path parameters.
PathId = Annotated[int, Path(ge=1, le=BIGINT_MAX)]
