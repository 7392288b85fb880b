from __future__ import annotations

import csv
import io
from typing import Any, Mapping, Sequence

from ..core.constants import CSV_DELIMITER, CSV_LINE_TERMINATOR
from ..core.exceptions import EmptyDatasetError


def to_csv(rows: Sequence[Mapping[str, Any]]) -> str:
    """Render rows as CSV text.

    The header is the first row's keys, in that row's order. Every row is written in
    that column order; missing keys become empty cells and extra keys are dropped.
    Separator and line terminator are pinned so equal input gives equal bytes.
    """

    if not rows:
        raise EmptyDatasetError("Nothing to export")

    fieldnames = list(rows[0].keys())
    out = io.StringIO()
    writer = csv.DictWriter(
        out,
        fieldnames=fieldnames,
        restval="",
        extrasaction="ignore",
        delimiter=CSV_DELIMITER,
        lineterminator=CSV_LINE_TERMINATOR,
    )
    writer.writeheader()
    for row in rows:
        writer.writerow({k: "" if v is None else v for k, v in row.items()})
    return out.getvalue()


def csv_response_bytes(text: str) -> bytes:
    # BOM so spreadsheet tools detect UTF-8.
    return text.encode("utf-8-sig")
