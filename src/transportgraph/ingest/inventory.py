"""
NE inventory loader.

Reads the tabular transport inventory (one row per Network Element with its
site identifiers and LLDP neighbor list) from CSV text, a local file or a
published HTTP(S) spreadsheet export.
"""

import csv
import io
import logging
from dataclasses import dataclass, field, replace
from typing import Iterable, Optional

import requests

from ..config import InventoryConfig, get_config
from ..exceptions import InventoryError

logger = logging.getLogger(__name__)


def split_tokens(value: Optional[str]) -> list[str]:
    """Split a comma-separated cell into trimmed, non-empty tokens."""
    return [t.strip() for t in (value or "").split(",") if t.strip()]


@dataclass
class InventoryRow:
    """One inventory record: an NE, its site identifiers and LLDP peers."""
    ne_name: str
    site_id: str = ""
    site_deps: list[str] = field(default_factory=list)
    lldp: list[str] = field(default_factory=list)

    @classmethod
    def from_record(
        cls, record: dict, columns: Optional[InventoryConfig] = None
    ) -> "InventoryRow":
        """Build a row from a CSV record, tolerating absent or blank cells."""
        cols = columns or InventoryConfig()
        return cls(
            ne_name=(record.get(cols.ne_name_column) or "").strip(),
            site_id=(record.get(cols.site_id_column) or "").strip(),
            site_deps=split_tokens(record.get(cols.site_deps_column)),
            lldp=split_tokens(record.get(cols.lldp_column)),
        )


class InventoryLoader:
    """
    Load inventory rows from a configured source.

    The source is either a path to a CSV file or an http(s) URL returning
    CSV (e.g. a published spreadsheet). Every call to ``load`` re-reads the
    source; nothing is cached between analyses.
    """

    def __init__(self, config: Optional[InventoryConfig] = None):
        self.config = config or get_config().inventory

    @property
    def source(self) -> str:
        return self.config.source

    def load(self) -> list[InventoryRow]:
        """Fetch and parse the inventory."""
        if self._is_url(self.source):
            text = self._fetch(self.source)
        else:
            text = self._read_file(self.source)
        rows = self.parse_csv(text)
        logger.info("Loaded %d inventory rows from %s", len(rows), self.source)
        return rows

    def parse_csv(self, text: str) -> list[InventoryRow]:
        """Parse CSV text with a header row into inventory rows."""
        # A leading BOM from spreadsheet exports would corrupt the first header
        reader = csv.DictReader(io.StringIO(text.lstrip("\ufeff")))
        rows = []
        try:
            for record in reader:
                if not any((v or "").strip() for v in record.values() if isinstance(v, str)):
                    continue
                rows.append(InventoryRow.from_record(record, self.config))
        except csv.Error as e:
            raise InventoryError(self.source, f"malformed CSV: {e}") from e
        return rows

    def _fetch(self, url: str) -> str:
        logger.debug("Fetching inventory from %s", url)
        try:
            resp = requests.get(url, timeout=self.config.timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise InventoryError(url, str(e)) from e
        # Without an explicit charset requests assumes ISO-8859-1 for text/*
        if "charset" not in resp.headers.get("Content-Type", "").lower():
            resp.encoding = "utf-8"
        return resp.text

    @staticmethod
    def _read_file(path: str) -> str:
        try:
            with open(path, encoding="utf-8", newline="") as f:
                return f.read()
        except OSError as e:
            raise InventoryError(path, str(e)) from e

    @staticmethod
    def _is_url(source: str) -> bool:
        return source.lower().startswith(("http://", "https://"))


def load_inventory(source: Optional[str] = None) -> list[InventoryRow]:
    """Convenience: load rows from ``source`` or the configured source."""
    config = get_config().inventory
    if source is not None:
        config = replace(config, source=source)
    return InventoryLoader(config).load()


def rows_from_records(
    records: Iterable[dict], columns: Optional[InventoryConfig] = None
) -> list[InventoryRow]:
    """Convert already-parsed mapping records into inventory rows."""
    return [InventoryRow.from_record(r, columns) for r in records]


class StaticInventory:
    """Serve a fixed, already-parsed set of rows through the loader interface."""

    source = "<static>"

    def __init__(self, rows: Iterable):
        self._rows = [
            r if isinstance(r, InventoryRow) else InventoryRow.from_record(r)
            for r in rows
        ]

    def load(self) -> list[InventoryRow]:
        return list(self._rows)
