# backend/app/utils/parser.py
import csv
import io
from typing import List

from openpyxl import load_workbook

from emailrisk import normalize_email

SUPPORTED_EXTENSIONS = (".csv", ".txt", ".xlsx")


def parse_csv_bytes(content: bytes) -> List[str]:
    text = content.decode("utf-8-sig", errors="ignore")
    reader = csv.reader(io.StringIO(text))
    addresses = []
    for row in reader:
        c = next((v.strip() for v in row if v and v.strip()), None)
        if c:
            addresses.append(c)
    return addresses


def parse_xlsx_bytes(content: bytes) -> List[str]:
    workbook = load_workbook(io.BytesIO(content), read_only=True)
    try:
        sheet = workbook.active
        addresses = []
        for row in sheet.iter_rows(values_only=True):
            if not row:
                continue
            c = next((str(cell).strip() for cell in row if cell is not None and str(cell).strip()), None)
            if c:
                addresses.append(c)
        return addresses
    finally:
        workbook.close()


def parse_address_file(filename: str, content: bytes) -> List[str]:
    """
    First non-empty cell of each row, normalized and de-duplicated in order.
    Header rows without an '@' are dropped.
    """
    fname = (filename or "").lower()
    if fname.endswith(".xlsx"):
        raw = parse_xlsx_bytes(content)
    else:
        raw = parse_csv_bytes(content)

    normalized = (normalize_email(a) for a in raw)
    return list(dict.fromkeys(a for a in normalized if "@" in a))
