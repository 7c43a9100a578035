"""Tests for spendview.domain.export pure functions."""

import csv
import io
from datetime import date, datetime
from decimal import Decimal

from spendview.domain.export import export_filename, export_to_csv, parse_csv_row, parse_expenses_csv
from spendview.domain.models import Category


class TestExportToCsv:
    """Tests for export_to_csv."""

    def test_header_only_for_no_records(self) -> None:
        """Should emit just the header row."""
        assert export_to_csv([]) == "Date,Amount,Category,Description"

    def test_row_format(self, make_expense) -> None:
        """Should quote every field and use a readable date and plain amount."""
        expense = make_expense(amount="12.50", category=Category.FOOD, expense_date=date(2025, 1, 5))
        assert export_to_csv([expense]) == 'Date,Amount,Category,Description\n"Jan 05, 2025","12.5","Food","Lunch"'

    def test_embedded_quotes_are_doubled(self, make_expense) -> None:
        """Should double quotes and keep commas inside the quoted field."""
        expense = make_expense(description='He said "hi", ok')
        line = export_to_csv([expense]).splitlines()[1]
        assert line.endswith(',"He said ""hi"", ok"')

    def test_keeps_caller_order(self, make_expense) -> None:
        """Should not re-sort records."""
        expenses = [make_expense(description=d) for d in ("zzz", "aaa", "mmm")]
        rows = export_to_csv(expenses).splitlines()[1:]
        assert [row.split(",")[-1] for row in rows] == ['"zzz"', '"aaa"', '"mmm"']

    def test_round_trip_with_csv_reader(self, make_expense) -> None:
        """Should recover every field with a standard CSV parser."""
        expenses = [
            make_expense(amount="1200", description='Quote " and, comma'),
            make_expense(amount="0.99", category=Category.BILLS, description="Multi\nline note"),
        ]
        rows = list(csv.reader(io.StringIO(export_to_csv(expenses))))
        assert rows[0] == ["Date", "Amount", "Category", "Description"]
        assert rows[1] == ["Jan 10, 2025", "1200", "Food", 'Quote " and, comma']
        assert rows[2] == ["Jan 10, 2025", "0.99", "Bills", "Multi\nline note"]


class TestParseExpensesCsv:
    """Tests for reading exported CSV back."""

    def test_round_trip(self, make_expense) -> None:
        """Should recover date, amount, category and description."""
        expense = make_expense(amount="42.5", category=Category.SHOPPING, description='Shoes "sale", 2 pairs')
        parsed = parse_expenses_csv(export_to_csv([expense]))
        assert parsed == [
            {
                "date": expense.date,
                "amount": Decimal("42.5"),
                "category": Category.SHOPPING,
                "description": 'Shoes "sale", 2 pairs',
            }
        ]

    def test_skips_invalid_rows(self) -> None:
        """Should skip rows with a bad date, amount or category."""
        text = "\n".join(
            [
                "Date,Amount,Category,Description",
                '"not a date","10","Food","Bad date"',
                '"Jan 05, 2025","abc","Food","Bad amount"',
                '"Jan 05, 2025","-3","Food","Negative"',
                '"Jan 05, 2025","10","Travel","Unknown category"',
                '"Jan 05, 2025","10","food","Good"',
            ]
        )
        parsed = parse_expenses_csv(text)
        assert [row["description"] for row in parsed] == ["Good"]
        assert parsed[0]["category"] == Category.FOOD

    def test_accepts_iso_dates(self) -> None:
        """Should also accept YYYY-MM-DD dates."""
        row = {"Date": "2025-01-05", "Amount": "3", "Category": "Other", "Description": "Stamp"}
        result = parse_csv_row(row)
        assert result is not None
        assert result["date"] == date(2025, 1, 5)

    def test_missing_columns(self) -> None:
        """Should return None when required columns are absent."""
        assert parse_csv_row({"Something": "else"}) is None


class TestExportFilename:
    """Tests for export_filename."""

    def test_uses_current_date(self) -> None:
        """Should embed today's date."""
        assert export_filename(datetime(2025, 1, 31, 23, 0)) == "expenses-2025-01-31.csv"
