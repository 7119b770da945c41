import logging
from pathlib import Path
from typing import Any

from draftswipe.ingest.csv_source import CsvSource
from draftswipe.ingest.json_source import JsonSource
from draftswipe.ingest.protocols import RowSource

logger = logging.getLogger(__name__)


def source_for(path: str | Path) -> RowSource:
    """Pick a roster source from the file extension."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".json":
        return JsonSource(path)
    if suffix in (".csv", ".tsv", ".txt"):
        return CsvSource(path)
    msg = f"Unsupported roster file type: {suffix or '(none)'}"
    raise ValueError(msg)


def load_roster_rows(path: str | Path) -> list[dict[str, Any]]:
    source = source_for(path)
    params: dict[str, Any] = {"sep": "\t"} if Path(path).suffix.lower() == ".tsv" else {}
    rows = source.fetch(**params)
    logger.info("Loaded %d roster rows from %s source %s", len(rows), source.source_type, source.source_detail)
    return rows
