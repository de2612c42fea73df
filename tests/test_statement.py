"""
Test suite for ledger export

Tests header layout, verbatim copying of log lines and destination handling.
"""

import io

import pytest
from decimal import Decimal

from atm_ledger.accounts import Account, CardIdentity
from atm_ledger.currency import Money
from atm_ledger.statement import SEPARATOR, ledger_lines, render_ledger, write_ledger


class TestLedgerRendering:
    """Test ledger text"""

    def setup_method(self):
        self.identity = CardIdentity(12345678, 1234)
        self.account = Account(owner_name="Sam Sepiol", balance=Money(Decimal('300.30')))

    def test_separator_is_28_hyphens(self):
        """Test the header separator width"""
        assert SEPARATOR == "----------------------------"
        assert len(SEPARATOR) == 28

    def test_header_lines(self):
        """Test the header precedes the transaction lines"""
        assert list(ledger_lines(self.identity, self.account)) == [
            "Name: Sam Sepiol",
            "Card Number: 12345678",
            "PIN: 1234",
            SEPARATOR,
        ]

    def test_numbers_printed_without_padding(self):
        """Test card and PIN are plain decimal integers"""
        text = render_ledger(CardIdentity(42, 7), self.account)

        assert "Card Number: 42\n" in text
        assert "PIN: 7\n" in text

    def test_log_lines_copied_verbatim(self):
        """Test transaction lines are exported as stored"""
        self.account.transactions.extend([
            "Withdrawal - Amount: $200.40, Updated Balance: $99.90",
            "Deposit - Amount: $40000.00, Updated Balance: $40099.90",
        ])

        text = render_ledger(self.identity, self.account)

        assert text.endswith(
            SEPARATOR + "\n"
            "Withdrawal - Amount: $200.40, Updated Balance: $99.90\n"
            "Deposit - Amount: $40000.00, Updated Balance: $40099.90\n"
        )
        assert text.count("\n") == 6


class TestWriteLedger:
    """Test ledger destinations"""

    def setup_method(self):
        self.identity = CardIdentity(1, 2)
        self.account = Account(owner_name="Zoë", balance=Money(Decimal('1')))

    def test_write_to_path_uses_lf_and_encoding(self, tmp_path):
        """Test file output is exactly the rendered text"""
        out = tmp_path / "ledger.txt"

        write_ledger(out, self.identity, self.account, encoding="utf-8")

        assert out.read_bytes() == render_ledger(self.identity, self.account).encode("utf-8")
        assert b"\r\n" not in out.read_bytes()

    def test_write_to_stream(self):
        """Test stream output"""
        buffer = io.StringIO()

        write_ledger(buffer, self.identity, self.account)

        assert buffer.getvalue().startswith("Name: Zoë\n")

    def test_unencodable_name_raises(self, tmp_path):
        """Test encoding failures surface to the caller"""
        with pytest.raises(UnicodeEncodeError):
            write_ledger(tmp_path / "ledger.txt", self.identity, self.account, encoding="ascii")
