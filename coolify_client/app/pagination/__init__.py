"""
Pagination package.

Normalizes the several listing shapes Coolify servers produce into one
``Page`` type, and derives page numbers when the server leaves them out.
"""

from .envelope import Page, Pagination, Meta
from .reconciler import ListResult, decode_page, derive_page, backfill_per_page

__all__ = [
    "Page",
    "Pagination",
    "Meta",
    "ListResult",
    "decode_page",
    "derive_page",
    "backfill_per_page",
]
