"""Page / page-size normalization for paginated listings and searches."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PageRequest:
    """Normalized pagination window.

    Attributes:
        page: Zero-based page index, never negative.
        page_size: Rows per page, at least 1.
    """

    page: int
    page_size: int

    @property
    def offset(self) -> int:
        return self.page * self.page_size

    def capped(self, max_page_size: Optional[int]) -> PageRequest:
        """Return a copy whose page size does not exceed `max_page_size`."""

        if max_page_size is None or self.page_size <= max_page_size:
            return self
        return PageRequest(page=self.page, page_size=max_page_size)


def normalize_page(
    page: Optional[int],
    page_size: Optional[int],
    default_page_size: int,
) -> PageRequest:
    """Clamp raw pagination inputs into a valid `PageRequest`.

    Absent or negative pages become 0. Absent or non-positive page sizes
    fall back to `default_page_size`. No upper bound is applied here.

    Raises:
        ValueError: `default_page_size` itself is not positive.
    """

    if default_page_size < 1:
        raise ValueError("default_page_size must be >= 1.")
    if page is None or page < 0:
        page = 0
    if page_size is None or page_size <= 0:
        page_size = default_page_size
    return PageRequest(page=page, page_size=page_size)
