"""
Core normalization logic.

Responsibilities:
- drop rows with no content
- header row selection (first row with a real, non-placeholder cell)
- unique header labels, with deterministic fallbacks
- records keyed by header, placeholders mapped to None
- drop columns and rows that carry no data
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from . import rules
from .errors import CsvIntakeError, EmptyInput, NoHeaderFound
from .models import NormalizedTable, Record, ViewState
from .tokenize import check_filename, tokenize_csv

logger = logging.getLogger(__name__)


def _trim(cell: Optional[str]) -> str:
    return (cell or "").strip()


def is_placeholder(cell: Optional[str]) -> bool:
    value = _trim(cell)
    return value == "" or value == rules.PLACEHOLDER


def _is_blank_row(row: Sequence[Optional[str]]) -> bool:
    return all(_trim(cell) == "" for cell in row)


def _unique_headers(row: Sequence[Optional[str]]) -> List[str]:
    """
    Trim header cells; empty or repeated labels get ``Column_<n>``.

    A placeholder header cell stays as the literal label, since it is not empty.
    """
    trimmed = [_trim(cell) for cell in row]
    taken = set(label for label in trimmed if label)
    headers: List[str] = []
    seen: set = set()
    counter = 0

    for label in trimmed:
        if not label or label in seen:
            while True:
                counter += 1
                label = f"{rules.FALLBACK_HEADER_PREFIX}_{counter}"
                if label not in taken:
                    break
            taken.add(label)
        seen.add(label)
        headers.append(label)

    return headers


def _build_record(headers: Sequence[str], row: Sequence[Optional[str]]) -> Record:
    record: Record = {}
    for i, header in enumerate(headers):
        value = row[i] if i < len(row) else None
        record[header] = None if is_placeholder(value) else _trim(value)
    return record


def normalize_rows(raw_rows: Iterable[Sequence[Optional[str]]]) -> NormalizedTable:
    rows = [row for row in raw_rows if not _is_blank_row(row)]
    if not rows:
        raise EmptyInput()

    header_index = next(
        (i for i, row in enumerate(rows) if any(not is_placeholder(cell) for cell in row)),
        None,
    )
    if header_index is None:
        raise NoHeaderFound()

    headers = _unique_headers(rows[header_index])
    records = [_build_record(headers, row) for row in rows[header_index + 1:]]

    kept = [h for h in headers if any(record[h] is not None for record in records)]
    projected = [{h: record[h] for h in kept} for record in records]
    # a row left with nothing but placeholders has no data to show
    projected = [record for record in projected if any(v is not None for v in record.values())]

    logger.info(
        "normalized table: header_row=%d columns=%d/%d rows=%d/%d",
        header_index, len(kept), len(headers), len(projected), len(records),
    )
    return NormalizedTable(
        headers=kept,
        rows=projected,
        dropped_columns=[h for h in headers if h not in kept],
        dropped_rows=len(records) - len(projected),
    )


def normalize_csv_bytes(filename: Optional[str], raw: bytes) -> NormalizedTable:
    check_filename(filename)
    return normalize_rows(tokenize_csv(raw))


def apply_upload(previous: ViewState, filename: Optional[str], raw: bytes) -> ViewState:
    """
    Run one upload through the pipeline and return the next view state.

    On failure the previous table stays on screen and only the error changes.
    """
    try:
        table = normalize_csv_bytes(filename, raw)
    except CsvIntakeError as exc:
        logger.warning("upload %r rejected: %s", filename, exc.message)
        return ViewState(headers=previous.headers, rows=previous.rows, error=exc.message)

    return ViewState(headers=table.headers, rows=table.rows, error=None)


def table_to_rows(table: NormalizedTable) -> List[List[str]]:
    out = [list(table.headers)]
    for record in table.rows:
        out.append([
            rules.PLACEHOLDER if record.get(h) is None else record[h]
            for h in table.headers
        ])
    return out
