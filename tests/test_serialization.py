"""Tests for the line codec and bulk save/load."""

import pytest
from datetime import date
from decimal import Decimal

from finance_ledger.ledger import Ledger
from finance_ledger.models.transaction import Transaction, TransactionKind
from finance_ledger.serialization import (
    ParseError,
    breaks_line_format,
    decode_line,
    encode_line,
    load_all,
    save_all,
)
from finance_ledger.services.storage import FlatFileStorage, InMemoryStorage


def tx(description, amount, kind, category, when):
    return Transaction.create(
        description=description,
        amount=Decimal(amount),
        kind=kind,
        category=category,
        date=when,
    ).unwrap()


@pytest.fixture
def sample_ledger():
    ledger = Ledger()
    ledger.add(tx("Salary", "1000", "Income", "Job", date(2024, 1, 1)))
    ledger.add(tx("Rent", "300.00", "Expense", "Housing", date(2024, 1, 2)))
    ledger.add(tx("Food", "49.95", "Expense", "Food", date(2024, 1, 3)))
    return ledger


class TestCodec:
    """Tests for encode_line/decode_line."""

    def test_encode_field_order(self):
        """Test description,amount,kind,category,date with ISO date."""
        line = encode_line(tx("Rent", "300.00", "Expense", "Housing", date(2024, 1, 2)))
        assert line == "Rent,300.00,Expense,Housing,2024-01-02"

    def test_decode_valid_line(self):
        """Test a well-formed line becomes a transaction."""
        transaction = decode_line("Salary,1000,Income,Job,2024-01-01")
        assert transaction.description == "Salary"
        assert transaction.amount == Decimal("1000")
        assert transaction.kind == TransactionKind.INCOME
        assert transaction.category == "Job"
        assert transaction.date == date(2024, 1, 1)

    @pytest.mark.parametrize(
        "line, reason",
        [
            ("Salary,1000,Income", "Expected 5 fields, found 3"),
            ("a,b,c,d,e,f", "Expected 5 fields, found 6"),
            ("Salary,lots,Income,Job,2024-01-01", "Invalid amount"),
            ("Salary,1000,Income,Job,01/02/2024", "Invalid date"),
            ("Salary,1000,Bonus,Job,2024-01-01", "Invalid transaction"),
            ("Salary,-5,Income,Job,2024-01-01", "Invalid transaction"),
            ("Sal\udcffary,1000,Income,Job,2024-01-01", "Line is not valid text"),
        ],
    )
    def test_decode_rejects_malformed(self, line, reason):
        """Test every kind of malformed line raises ParseError."""
        with pytest.raises(ParseError) as exc_info:
            decode_line(line)
        assert exc_info.value.reason.startswith(reason)
        assert exc_info.value.line == line


class TestSaveAll:
    """Tests for save_all()."""

    def test_writes_one_line_per_transaction(self, sample_ledger):
        """Test lines are written in ledger order."""
        storage = InMemoryStorage()
        report = save_all(sample_ledger, storage)
        assert report.written_count == 3
        assert report.has_unsafe_lines is False
        assert storage.lines == [
            "Salary,1000,Income,Job,2024-01-01",
            "Rent,300.00,Expense,Housing,2024-01-02",
            "Food,49.95,Expense,Food,2024-01-03",
        ]

    def test_replaces_previous_contents(self, sample_ledger):
        """Test a save overwrites what was stored before."""
        storage = InMemoryStorage(["old,1,Income,Old,2020-01-01"])
        save_all(sample_ledger, storage)
        assert len(storage.lines) == 3

    def test_empty_ledger(self):
        """Test saving an empty ledger writes nothing."""
        storage = InMemoryStorage()
        assert save_all(Ledger(), storage).written_count == 0
        assert storage.exists() is True
        assert storage.lines == []

    def test_flags_delimiter_in_free_text(self):
        """Test records with commas are written verbatim but reported."""
        ledger = Ledger()
        ledger.add(tx("Rent", "300", "Expense", "Housing", date(2024, 1, 2)))
        ledger.add(tx("Fish, chips", "12", "Expense", "Food", date(2024, 1, 3)))
        storage = InMemoryStorage()
        report = save_all(ledger, storage)
        assert report.unsafe_line_numbers == [2]
        assert storage.lines[1] == "Fish, chips,12,Expense,Food,2024-01-03"

    @pytest.mark.parametrize("text", ["Lunch\nout", "Lunch\rout", "Lunch\r\nout"])
    def test_flags_line_breaks_in_free_text(self, text):
        """Test a line break inside description or category is reported."""
        assert breaks_line_format(tx(text, "12", "Expense", "Food", date(2024, 1, 3)))
        assert breaks_line_format(tx("Lunch", "12", "Expense", text, date(2024, 1, 3)))
        assert not breaks_line_format(tx("Lunch", "12", "Expense", "Food", date(2024, 1, 3)))


class TestLoadAll:
    """Tests for load_all()."""

    def test_one_good_line_one_short_line(self):
        """Test a 3-field line is skipped and the good line kept."""
        storage = InMemoryStorage([
            "Salary,1000,Income,Job,2024-01-01",
            "Rent,300,Expense",
        ])
        ledger = Ledger()
        report = load_all(ledger, storage)
        assert len(ledger) == 1
        assert report.loaded_count == 1
        assert report.skipped_count == 1
        assert report.skipped[0].line_number == 2
        assert report.skipped[0].line == "Rent,300,Expense"

    def test_keeps_going_after_bad_lines(self):
        """Test malformed lines anywhere never abort the load."""
        storage = InMemoryStorage([
            "bad",
            "Salary,1000,Income,Job,2024-01-01",
            "Rent,abc,Expense,Housing,2024-01-02",
            "Rent,300,Expense,Housing,2024-01-02",
            "Gift,20,Present,Misc,2024-01-05",
        ])
        ledger = Ledger()
        report = load_all(ledger, storage)
        assert [t.description for t in ledger] == ["Salary", "Rent"]
        assert [s.line_number for s in report.skipped] == [1, 3, 5]

    def test_appends_to_existing_ledger(self, sample_ledger):
        """Test loaded records go after what the ledger already holds."""
        storage = InMemoryStorage(["Bonus,50,Income,Job,2024-02-01"])
        load_all(sample_ledger, storage)
        assert len(sample_ledger) == 4
        assert sample_ledger.transactions[-1].description == "Bonus"

    def test_blank_lines_ignored(self):
        """Test blank lines are neither loaded nor reported."""
        storage = InMemoryStorage(["", "Salary,1000,Income,Job,2024-01-01", "   "])
        report = load_all(Ledger(), storage)
        assert report.loaded_count == 1
        assert report.skipped == []

    def test_missing_source(self, tmp_path):
        """Test a missing file is nothing to load, not an error."""
        ledger = Ledger()
        report = load_all(ledger, FlatFileStorage(tmp_path / "missing.txt"))
        assert report.source_missing is True
        assert report.nothing_to_load is True
        assert len(ledger) == 0

    def test_undecodable_line_is_skipped(self, tmp_path):
        """Test a line with bytes invalid in the encoding is skipped, not fatal."""
        path = tmp_path / "ledger.txt"
        path.write_bytes(
            b"ok,1,Income,Job,2024-01-01\nbad\xff,1,Expense,F,2024-01-01\n"
        )
        ledger = Ledger()
        report = load_all(ledger, FlatFileStorage(path, encoding="utf-8"))
        assert report.loaded_count == 1
        assert report.skipped_count == 1
        assert [t.description for t in ledger] == ["ok"]
        assert report.skipped[0].line_number == 2
        assert report.skipped[0].line == "bad\\xff,1,Expense,F,2024-01-01"
        assert "not valid text" in report.skipped[0].reason


class TestRoundTrip:
    """Tests for save_all followed by load_all."""

    def test_file_round_trip(self, sample_ledger, tmp_path):
        """Test a saved ledger loads back field-wise equal."""
        storage = FlatFileStorage(tmp_path / "ledger.txt")
        save_all(sample_ledger, storage)

        restored = Ledger()
        report = load_all(restored, storage)

        assert report.skipped == []
        assert restored.transactions == sample_ledger.transactions
        assert restored.total_expenses() == Decimal("349.95")

    def test_round_trip_preserves_aggregates(self, sample_ledger):
        """Test summaries match after a round trip."""
        storage = InMemoryStorage()
        save_all(sample_ledger, storage)
        restored = Ledger()
        load_all(restored, storage)
        assert restored.summary() == sample_ledger.summary()

    @pytest.mark.parametrize("line_break", ["\n", "\r"])
    def test_line_break_is_flagged_before_it_splits_the_record(
        self, line_break, tmp_path
    ):
        """Test a saved line break is reported, since it reloads as two lines."""
        ledger = Ledger()
        ledger.add(
            tx(f"Lunch{line_break}out", "12", "Expense", "Food", date(2024, 1, 3))
        )
        storage = FlatFileStorage(tmp_path / "ledger.txt")

        save_report = save_all(ledger, storage)
        assert save_report.unsafe_line_numbers == [1]

        restored = Ledger()
        load_report = load_all(restored, storage)
        assert restored.transactions != ledger.transactions
        assert [s.line for s in load_report.skipped] == ["Lunch"]
