# backend/farmsync/services/export_service.py

"""
Export formatting for record lists.

 - CSV: header row of title-cased field names (or explicit display headers),
   minimal RFC 4180 quoting, rows in input order
 - HTML: print-ready report (summary block + table); the browser print
   dialog turns it into a PDF
 - XLSX: single-sheet workbook

Entity exports resolve farm / crop ids to names and humanize enum values.
"""

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence
import csv
import io

from jinja2 import Environment, PackageLoader, select_autoescape
from openpyxl import Workbook
from openpyxl.styles import Font

from farmsync.core.config import settings
from farmsync.services.aggregate_service import sum_amounts, to_amount
from farmsync.services.categories import humanize
from farmsync.services.filter_service import field_value, parse_date

UNKNOWN_FARM = "Unknown Farm"
UNKNOWN_CROP = "Unknown Crop"

CROP_HEADERS = ["Crop Name", "Variety", "Farm", "Field", "Growth Stage", "Planting Date", "Expected Harvest Date"]
EXPENSE_HEADERS = ["Date", "Category", "Amount", "Farm", "Description"]
INCOME_HEADERS = ["Date", "Source", "Amount", "Farm", "Crop", "Description"]

_env = Environment(
    loader=PackageLoader("farmsync", "templates"),
    autoescape=select_autoescape(["html"]),
)


# ============================================================
# Value formatting
# ============================================================
def title_case(field: str) -> str:
    return humanize(field)


def format_date(value: Any, long: bool = False) -> str:
    d = parse_date(value)
    if d is None:
        return ""
    if long:
        return f"{d:%b} {d.day}, {d.year}"
    return d.strftime("%Y-%m-%d")


def format_currency(amount: Any, symbol: Optional[str] = None, grouped: bool = False) -> str:
    symbol = settings.CURRENCY_SYMBOL if symbol is None else symbol
    value = to_amount(amount)
    return f"{symbol}{value:,.2f}" if grouped else f"{symbol}{value:.2f}"


def _name_lookup(records: Optional[Iterable[Any]]) -> Dict[str, str]:
    return {
        str(field_value(r, "id")): field_value(r, "name")
        for r in (records or [])
        if field_value(r, "id") is not None
    }


def farm_name(farm_id: Any, farms: Optional[Iterable[Any]]) -> str:
    return _name_lookup(farms).get(str(farm_id), UNKNOWN_FARM)


def crop_name(crop_id: Any, crops: Optional[Iterable[Any]]) -> str:
    if crop_id in (None, ""):
        return ""
    return _name_lookup(crops).get(str(crop_id), UNKNOWN_CROP)


def _cell(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


# ============================================================
# Generic formatters
# ============================================================
def to_csv(rows: Iterable[Dict[str, Any]], headers: Optional[Sequence[str]] = None) -> str:
    """
    With ``headers`` the rows are keyed by those display headers. Without
    them every field seen in the rows becomes a column, titled e.g.
    ``farm_id`` -> ``Farm Id``.
    """
    rows = list(rows)
    if headers is None:
        fields: List[str] = []
        for row in rows:
            for key in row:
                if key not in fields:
                    fields.append(key)
        header_row = [title_case(f) for f in fields]
    else:
        fields = list(headers)
        header_row = list(headers)

    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(header_row)
    for row in rows:
        writer.writerow([_cell(row.get(f)) for f in fields])
    return buf.getvalue()


def to_html_report(
    title: str,
    headers: Sequence[str],
    rows: Iterable[Dict[str, Any]],
    summary: Sequence[tuple],
    generated_on: Optional[datetime] = None,
    auto_print: bool = False,
) -> str:
    generated_on = generated_on or datetime.now()
    template = _env.get_template("report.html")
    return template.render(
        title=title,
        headers=list(headers),
        rows=list(rows),
        summary=list(summary),
        generated_on=f"{generated_on:%B} {generated_on.day}, {generated_on.year}",
        auto_print=auto_print,
    )


def to_xlsx(title: str, headers: Sequence[str], rows: Iterable[Dict[str, Any]]) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = title[:31]
    ws.append(list(headers))
    for cell in ws[1]:
        cell.font = Font(bold=True)
    for row in rows:
        ws.append([_cell(row.get(h)) for h in headers])

    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


# ============================================================
# Entity rows
# ============================================================
def crop_rows(crops: Iterable[Any], farms: Iterable[Any], long_dates: bool = False) -> List[Dict[str, str]]:
    farms = list(farms or [])
    return [
        {
            "Crop Name": field_value(c, "name") or "",
            "Variety": field_value(c, "variety") or "",
            "Farm": farm_name(field_value(c, "farm_id"), farms),
            "Field": field_value(c, "field") or "",
            "Growth Stage": humanize(field_value(c, "growth_stage")),
            "Planting Date": format_date(field_value(c, "planting_date"), long_dates),
            "Expected Harvest Date": format_date(field_value(c, "expected_harvest_date"), long_dates),
        }
        for c in crops
    ]


def expense_rows(expenses: Iterable[Any], farms: Iterable[Any], long_dates: bool = False) -> List[Dict[str, str]]:
    farms = list(farms or [])
    return [
        {
            "Date": format_date(field_value(e, "date"), long_dates),
            "Category": humanize(field_value(e, "category")),
            "Amount": format_currency(field_value(e, "amount")),
            "Farm": farm_name(field_value(e, "farm_id"), farms),
            "Description": field_value(e, "description") or "",
        }
        for e in expenses
    ]


def income_rows(
    income: Iterable[Any],
    farms: Iterable[Any],
    crops: Iterable[Any],
    long_dates: bool = False,
) -> List[Dict[str, str]]:
    farms = list(farms or [])
    crops = list(crops or [])
    rows = []
    for i in income:
        fid = field_value(i, "farm_id")
        rows.append({
            "Date": format_date(field_value(i, "date"), long_dates),
            "Source": humanize(field_value(i, "source")),
            "Amount": format_currency(field_value(i, "amount")),
            "Farm": farm_name(fid, farms) if fid else "",
            "Crop": crop_name(field_value(i, "crop_id"), crops),
            "Description": field_value(i, "description") or "",
        })
    return rows


# ============================================================
# Entity exports
# ============================================================
def export_crops_csv(crops, farms) -> str:
    return to_csv(crop_rows(crops, farms), CROP_HEADERS)


def export_expenses_csv(expenses, farms) -> str:
    return to_csv(expense_rows(expenses, farms), EXPENSE_HEADERS)


def export_income_csv(income, farms, crops) -> str:
    return to_csv(income_rows(income, farms, crops), INCOME_HEADERS)


def export_crops_html(crops, farms, auto_print: bool = False) -> str:
    crops = list(crops)
    return to_html_report(
        "Crops Report",
        CROP_HEADERS,
        crop_rows(crops, farms, long_dates=True),
        [("Total Crops", len(crops))],
        auto_print=auto_print,
    )


def export_expenses_html(expenses, farms, auto_print: bool = False) -> str:
    expenses = list(expenses)
    return to_html_report(
        "Expenses Report",
        EXPENSE_HEADERS,
        expense_rows(expenses, farms, long_dates=True),
        [
            ("Total Expenses", len(expenses)),
            ("Total Amount", format_currency(sum_amounts(expenses), grouped=True)),
        ],
        auto_print=auto_print,
    )


def export_income_html(income, farms, crops, auto_print: bool = False) -> str:
    income = list(income)
    return to_html_report(
        "Income Report",
        INCOME_HEADERS,
        income_rows(income, farms, crops, long_dates=True),
        [
            ("Total Records", len(income)),
            ("Total Income", format_currency(sum_amounts(income), grouped=True)),
        ],
        auto_print=auto_print,
    )


def export_crops_xlsx(crops, farms) -> bytes:
    return to_xlsx("Crops", CROP_HEADERS, crop_rows(crops, farms))


def export_expenses_xlsx(expenses, farms) -> bytes:
    return to_xlsx("Expenses", EXPENSE_HEADERS, expense_rows(expenses, farms))


def export_income_xlsx(income, farms, crops) -> bytes:
    return to_xlsx("Income", INCOME_HEADERS, income_rows(income, farms, crops))
