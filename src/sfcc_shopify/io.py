from __future__ import annotations
import csv
from pathlib import Path
from typing import Iterable, List, Sequence


XLSX_EXTS = (".xlsx", ".xlsm", ".xltx", ".xltm")


def read_rows(input_path: Path, skip_header: bool = True) -> List[List[str]]:
    """Read a CSV into lists of stripped cells.

    Blank lines and rows made only of empty cells are dropped. The first
    non-blank row is treated as the header and skipped unless `skip_header`
    is False.
    """
    with input_path.open("r", newline="", encoding="utf-8-sig") as f:
        reader = list(csv.reader(f))
    return _drop_blank_and_header(reader, skip_header)


def _drop_blank_and_header(raw_rows: Iterable[Sequence[str]], skip_header: bool) -> List[List[str]]:
    rows: List[List[str]] = []
    header_seen = not skip_header
    for raw in raw_rows:
        if not raw or not any((c or "").strip() for c in raw):
            continue
        if not header_seen:
            header_seen = True
            continue
        rows.append([(c or "").strip() for c in raw])
    return rows


def _read_rows_xlsx(input_path: Path, skip_header: bool = True) -> List[List[str]]:
    def _val_to_str(v):
        # Excel numeric cells: 5225.0 -> '5225'
        if isinstance(v, bool):
            return str(v)
        if isinstance(v, (int, float)):
            if float(v).is_integer():
                return str(int(v))
            return str(v)
        return "" if v is None else str(v)

    from openpyxl import load_workbook

    wb = load_workbook(filename=str(input_path), read_only=True, data_only=True)
    try:
        ws = wb.worksheets[0] if wb.worksheets else None
        if ws is None:
            return []
        sheet_rows = [[_val_to_str(v) for v in row] for row in ws.iter_rows(values_only=True)]
    finally:
        wb.close()
    return _drop_blank_and_header(sheet_rows, skip_header)


def read_any_rows(input_path: Path, skip_header: bool = True) -> List[List[str]]:
    ext = input_path.suffix.lower()
    if ext in XLSX_EXTS:
        return _read_rows_xlsx(input_path, skip_header=skip_header)
    if ext == ".xls":
        raise ValueError(f"Legacy .xls workbooks are not supported, re-save as .xlsx: {input_path}")
    # default try CSV
    return read_rows(input_path, skip_header=skip_header)


def write_csv(output_path: Path, header: Sequence[str], rows: Iterable[Sequence[object]]) -> int:
    """Write a fully-quoted CSV with LF line endings and return the data row count."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with output_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow(list(header))
        for r in rows:
            writer.writerow(["" if v is None else v for v in r])
            count += 1
    return count
