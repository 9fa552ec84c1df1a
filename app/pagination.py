"""Normalization of raw ``page``/``limit`` query parameters.

Query strings arrive as text; they are coerced to positive integers here so
that the offset arithmetic downstream never sees a non-numeric, zero or
negative value.
"""

from typing import Optional, Union

from pydantic import BaseModel, Field

from app.exceptions import InvalidPaginationInput

RawValue = Optional[Union[int, str]]

DEFAULT_PAGE = 1
# largest value a BIGINT / SQLite INTEGER offset can hold
MAX_OFFSET = 2**63 - 1


class PaginationRequest(BaseModel):
    page: int = Field(ge=1, description="1-based page number.")
    limit: int = Field(ge=1, description="Maximum number of items per page.")

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


def _to_positive_int(field: str, value: RawValue, default: int) -> int:
    if value is None:
        return default

    # bool is an int subclass
    if isinstance(value, bool):
        raise InvalidPaginationInput(field, value, "must be a positive integer")

    if isinstance(value, int):
        parsed = value
    else:
        text = str(value).strip()
        if not text:
            return default
        # plain ASCII digits only: no sign, underscores or other scripts
        if not (text.isascii() and text.isdecimal()):
            raise InvalidPaginationInput(field, value, "must be a positive integer")
        try:
            parsed = int(text)
        except ValueError:
            # over the interpreter's int digit limit
            raise InvalidPaginationInput(field, value, "is too large") from None

    if parsed < 1:
        raise InvalidPaginationInput(field, value, "must be greater than or equal to 1")
    return parsed


def parse_pagination(
    page: RawValue,
    limit: RawValue,
    *,
    default_limit: int,
    max_limit: Optional[int] = None,
) -> PaginationRequest:
    """Coerce raw ``page`` and ``limit`` values into a :class:`PaginationRequest`.

    Missing or blank values fall back to page 1 and ``default_limit``.
    Raises :class:`InvalidPaginationInput` for non-integer or non-positive
    values, for a limit above ``max_limit`` when one is set, and when the
    resulting offset does not fit a signed 64-bit column.
    """
    parsed_page = _to_positive_int("page", page, DEFAULT_PAGE)
    parsed_limit = _to_positive_int("limit", limit, default_limit)
    if max_limit is not None and parsed_limit > max_limit:
        raise InvalidPaginationInput("limit", limit, f"must be less than or equal to {max_limit}")
    if parsed_limit > MAX_OFFSET:
        raise InvalidPaginationInput("limit", limit, f"must be less than or equal to {MAX_OFFSET}")

    pagination = PaginationRequest(page=parsed_page, limit=parsed_limit)
    if pagination.skip > MAX_OFFSET:
        raise InvalidPaginationInput("page", page, "is too large for the requested limit")
    return pagination
