import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class JsonSource:
    """Roster rows from a JSON document: a list of row objects, or an object holding one under "players"."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def source_type(self) -> str:
        return "json"

    @property
    def source_detail(self) -> str:
        return str(self._path)

    def fetch(self, **params: Any) -> list[dict[str, Any]]:
        logger.debug("Reading JSON %s", self._path)
        encoding = params.pop("encoding", "utf-8")
        with open(self._path, encoding=encoding) as f:
            document = json.load(f)
        if isinstance(document, dict):
            document = document.get("players")
        if not isinstance(document, list):
            msg = f"Expected a list of player rows in {self._path}"
            raise ValueError(msg)
        rows = [row for row in document if isinstance(row, dict)]
        logger.debug("Read %d rows from %s", len(rows), self._path)
        return rows
