import csv
import logging
from pathlib import Path
from typing import Any

from draftswipe.ingest._csv_helpers import clean_cells, strip_bom

logger = logging.getLogger(__name__)


class CsvSource:
    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def source_type(self) -> str:
        return "csv"

    @property
    def source_detail(self) -> str:
        return str(self._path)

    def fetch(self, **params: Any) -> list[dict[str, Any]]:
        logger.debug("Reading CSV %s", self._path)
        encoding = params.pop("encoding", "utf-8")
        delimiter = params.pop("sep", params.pop("delimiter", ","))
        with open(self._path, encoding=encoding, newline="") as f:
            lines = [strip_bom(line) if i == 0 else line for i, line in enumerate(f)]
        reader = csv.DictReader(lines, delimiter=delimiter)
        rows = [clean_cells(row) for row in reader]
        logger.debug("Read %d rows from %s", len(rows), self._path)
        return rows
