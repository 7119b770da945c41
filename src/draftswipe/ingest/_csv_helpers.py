from typing import Any


def strip_bom(text: str) -> str:
    return text.removeprefix("\ufeff")


def clean_cells(row: dict[str | None, Any]) -> dict[str, Any]:
    """Trim roster cells and turn blanks into None.

    Cells past the header row (``csv.DictReader`` files them under ``None``)
    are dropped; spreadsheet exports often pad rows with trailing commas.
    """
    cleaned: dict[str, Any] = {}
    for key, value in row.items():
        if key is None:
            continue
        if isinstance(value, str):
            value = value.strip()
        cleaned[key.strip()] = None if value == "" else value
    return cleaned
