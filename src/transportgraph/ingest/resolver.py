"""
NE name resolution.

Maps user-typed identifiers (an NE name, a Site ID, a Site DEPS token or a
name fragment) onto canonical NE names from the inventory.
"""

import logging
from typing import Iterable

from .inventory import InventoryRow

logger = logging.getLogger(__name__)


def resolve_input(rows: list[InventoryRow], text: str) -> list[str]:
    """
    Resolve one free-text identifier to canonical NE names.

    Precedence:
      1. exact NE name
      2. exact Site ID
      3. exact Site DEPS token
      4. every NE name containing the text as a substring
    The first three stop at the first matching row.
    """
    query = text.strip()
    if not query:
        return []

    for row in rows:
        if row.ne_name and row.ne_name == query:
            return [row.ne_name]

    for row in rows:
        if row.ne_name and row.site_id == query:
            return [row.ne_name]

    for row in rows:
        if row.ne_name and query in row.site_deps:
            return [row.ne_name]

    matches = [row.ne_name for row in rows if row.ne_name and query in row.ne_name]
    logger.debug("Substring resolution of %r matched %d NEs", query, len(matches))
    return matches


def resolve_all(rows: list[InventoryRow], inputs: Iterable[str]) -> list[str]:
    """Resolve several identifiers, keeping first-seen order without duplicates."""
    resolved: dict[str, None] = {}
    for text in inputs:
        for name in resolve_input(rows, text):
            resolved.setdefault(name)
    return list(resolved)


def lookup(rows: list[InventoryRow], query: str) -> list[str]:
    """
    Case-insensitive search for the lookup box.

    Matches NE names containing the query, and NEs whose Site ID or one of
    whose Site DEPS tokens equals the query.
    """
    q = query.strip().lower()
    if not q:
        return []

    found: dict[str, None] = {}
    for row in rows:
        if not row.ne_name:
            continue
        if (
            q in row.ne_name.lower()
            or row.site_id.lower() == q
            or any(d.lower() == q for d in row.site_deps)
        ):
            found.setdefault(row.ne_name)
    return list(found)
