"""
Load a premium rate matrix into the rate store.

What it does:
- Reads the `matrix` worksheet of an .xlsx workbook (openpyxl); empty rows
  before and after the data are dropped, empty rows inside it are kept and
  fail the load like any other row without a premium
- Turns every row into a (rate key, score, premium) entry:
    column 0 = product code
    column 1 = insured-sum band
    column 2 = ignored
    column 3 = premium (must be an integer)
  The row's 1-based position is its risk score.
- Inserts the entries one row at a time, stopping at the first row whose
  premium is not an integer. Rows inserted before that stay in the store.

Usage:
  python scripts/manage_rate_matrix.py load --path premium_tables.xlsx
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence, Union

from openpyxl import load_workbook

from src.database.interfaces import RateStoreClient
from src.premium.errors import InternalServerError, RiskCalculationError
from src.premium.keys import rate_key
from src.premium.models import RateEntry
from src.utils.config_loader import MatrixConfig

logger = logging.getLogger(__name__)

PRODUCT_CODE_COLUMN = 0
SUM_INSURED_COLUMN = 1
PREMIUM_COLUMN = 3

PREMIUM_PATTERN = re.compile(r"[+-]?[0-9]+")
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _is_empty(row: Sequence[str]) -> bool:
    return all(v == "" for v in row)


def _trim_empty_rows(rows: List[List[str]]) -> List[List[str]]:
    """Drop empty rows before the first and after the last data row; inner ones are kept."""
    start = 0
    end = len(rows)
    while start < end and _is_empty(rows[start]):
        start += 1
    while end > start and _is_empty(rows[end - 1]):
        end -= 1
    return rows[start:end]


def parse_premium(raw: str) -> int:
    """Strict signed 32-bit integer: ASCII digits with an optional sign, nothing else."""
    if not PREMIUM_PATTERN.fullmatch(raw):
        raise ValueError(f"not an integer: {raw!r}")
    value = int(raw)
    if not INT32_MIN <= value <= INT32_MAX:
        raise ValueError(f"out of 32-bit range: {raw!r}")
    return value


def read_matrix(path: Union[str, Path], sheet: str = "matrix") -> List[List[str]]:
    """
    Read the rows of `sheet` between the first and last non-empty row as cell texts.

    Raises:
        InternalServerError: the workbook cannot be opened
        RiskCalculationError: the workbook has no such sheet
    """
    path = Path(path)
    try:
        workbook = load_workbook(filename=path, read_only=True, data_only=True)
    except Exception as e:
        logger.error("Cannot open rate matrix workbook %s: %s", path, e)
        raise InternalServerError() from e

    try:
        if sheet not in workbook.sheetnames:
            logger.error("Workbook %s has no sheet %r (found %s)", path, sheet, workbook.sheetnames)
            raise RiskCalculationError(f"Rate matrix sheet {sheet!r} not found")

        rows = [[_cell_text(v) for v in raw] for raw in workbook[sheet].iter_rows(values_only=True)]
    finally:
        workbook.close()

    rows = _trim_empty_rows(rows)
    logger.info("Read %d rows from %s[%s]", len(rows), path, sheet)
    return rows


def build_rate_entry(row: Sequence[str], score: int) -> RateEntry:
    """Turn one matrix row into a RateEntry; a non-integer premium is an InternalServerError."""
    product_code = row[PRODUCT_CODE_COLUMN] if len(row) > PRODUCT_CODE_COLUMN else ""
    sum_insured = row[SUM_INSURED_COLUMN] if len(row) > SUM_INSURED_COLUMN else ""
    raw_premium = row[PREMIUM_COLUMN] if len(row) > PREMIUM_COLUMN else ""

    try:
        premium = parse_premium(raw_premium)
    except (TypeError, ValueError) as e:
        logger.error("Row %d: premium %r is not an integer", score, raw_premium)
        raise InternalServerError() from e

    return RateEntry(key=rate_key(product_code, sum_insured), score=score, premium=str(premium))


class RateLoader:
    def __init__(self, store: RateStoreClient, matrix: Optional[MatrixConfig] = None) -> None:
        self.store = store
        self.matrix = matrix or MatrixConfig()

    def load(self, rows: Iterable[Sequence[str]]) -> int:
        """Insert every row; returns the number of entries written."""
        loaded = 0
        for score, row in enumerate(rows, start=1):
            entry = build_rate_entry(row, score)
            self.store.bulk_insert(entry.key, entry.score, entry.premium)
            loaded += 1
        logger.info("Loaded %d rate entries", loaded)
        return loaded

    def load_workbook(self, path: Optional[Union[str, Path]] = None, sheet: Optional[str] = None) -> int:
        rows = read_matrix(path or self.matrix.path, sheet or self.matrix.sheet)
        return self.load(rows)
