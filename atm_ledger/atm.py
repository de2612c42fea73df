"""
Teller Engine Module

The in-memory account engine behind a single automated teller: registers
accounts keyed by (card number, PIN), answers balance inquiries, processes
cash withdrawals and deposits, and exports per-account ledgers.

Every operation validates fully before mutating, so a failed call leaves
balance and transaction log exactly as they were.
"""

from decimal import Decimal
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple
import threading

from .accounts import Account, AccountSnapshot, CardIdentity
from .config import AtmConfig, get_config
from .currency import AmountLike, Currency, Money
from .errors import InsufficientFunds, InvalidArgument
from .logging_config import configure_logging, get_logger, log_action, mask_card_number
from .statement import Destination, render_ledger, write_ledger
from .transactions import TransactionType, format_transaction


class Atm:
    """
    Account engine owning every account record for its lifetime
    """

    def __init__(self, config: Optional[AtmConfig] = None):
        self.config = config or get_config()
        self.currency = Currency.from_code(self.config.currency)
        configure_logging(self.config)
        self.logger = get_logger("atm_ledger.atm")
        self._accounts: Dict[CardIdentity, Account] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._accounts)

    def __contains__(self, identity: object) -> bool:
        return identity in self._accounts

    @property
    def accounts(self) -> Mapping[CardIdentity, AccountSnapshot]:
        """Read-only snapshot of every account keyed by identity"""
        with self._lock:
            return MappingProxyType({
                identity: account.snapshot()
                for identity, account in self._accounts.items()
            })

    @property
    def transactions(self) -> Mapping[CardIdentity, Tuple[str, ...]]:
        """Read-only snapshot of every transaction log keyed by identity"""
        with self._lock:
            return MappingProxyType({
                identity: account.history()
                for identity, account in self._accounts.items()
            })

    def register_account(self, card_number: int, pin: int, name: str,
                         initial_balance: AmountLike) -> Account:
        """
        Register a new account with an empty transaction log

        Args:
            card_number: Card number (unsigned 64-bit)
            pin: PIN (unsigned 32-bit)
            name: Account holder name, printed in the ledger header
            initial_balance: Opening balance

        Returns:
            The created Account

        Raises:
            InvalidArgument: If the identity is already registered or any
                argument is malformed
        """
        identity = self._identity(card_number, pin, "register_account")
        opening = self._money(initial_balance, identity, "register_account")

        with self._lock:
            if identity in self._accounts:
                self._reject("register_account", identity, "Account already registered")

            if opening.is_negative() and self.config.reject_negative_opening_balance:
                self._reject("register_account", identity, "Opening balance must not be negative")

            try:
                account = Account(owner_name=name, balance=opening)
            except InvalidArgument as e:
                self._reject("register_account", identity, str(e))

            if opening.is_negative():
                log_action(
                    self.logger, "warning", "Account registered with negative opening balance",
                    action="register_account", resource=self._resource(identity),
                    details={"initial_balance": opening.to_string()}
                )
            self._accounts[identity] = account

        log_action(
            self.logger, "info", "Account registered",
            action="register_account", resource=self._resource(identity),
            details={"initial_balance": opening.to_string()}
        )
        return account

    def has_account(self, card_number: int, pin: int) -> bool:
        """Check whether the identity is registered; malformed identities are never registered"""
        try:
            identity = CardIdentity(card_number, pin)
        except InvalidArgument:
            return False
        return identity in self._accounts

    def check_balance(self, card_number: int, pin: int) -> Decimal:
        """Current balance of the account"""
        identity, account = self._lookup(card_number, pin, "check_balance")
        return account.balance.amount

    def get_transactions(self, card_number: int, pin: int) -> Tuple[str, ...]:
        """Transaction log of the account in insertion order"""
        identity, account = self._lookup(card_number, pin, "get_transactions")
        return account.history()

    def withdraw_cash(self, card_number: int, pin: int, amount: AmountLike) -> str:
        """
        Withdraw cash from an account

        Returns:
            The recorded log line

        Raises:
            InvalidArgument: Unknown identity or non-positive amount
            InsufficientFunds: Amount exceeds the current balance
        """
        with self._lock:
            identity, account = self._lookup(card_number, pin, "withdraw_cash")
            cash = self._positive_amount(amount, identity, "withdraw_cash")

            if cash > account.balance:
                log_action(
                    self.logger, "warning", "Withdrawal rejected: insufficient funds",
                    action="withdraw_cash", resource=self._resource(identity),
                    details={"amount": cash.to_string(), "balance": account.balance.to_string()}
                )
                raise InsufficientFunds(
                    f"Insufficient funds: requested {cash.to_string()}, "
                    f"available {account.balance.to_string()}",
                    requested=cash.amount,
                    available=account.balance.amount
                )

            return self._post(identity, account, TransactionType.WITHDRAWAL, cash,
                              account.balance - cash)

    def deposit_cash(self, card_number: int, pin: int, amount: AmountLike) -> str:
        """
        Deposit cash into an account

        Returns:
            The recorded log line

        Raises:
            InvalidArgument: Unknown identity, non-positive amount, or a
                resulting balance too large to hold at cent precision
        """
        with self._lock:
            identity, account = self._lookup(card_number, pin, "deposit_cash")
            cash = self._positive_amount(amount, identity, "deposit_cash")
            try:
                new_balance = account.balance + cash
            except InvalidArgument as e:
                self._reject("deposit_cash", identity, str(e))
            return self._post(identity, account, TransactionType.DEPOSIT, cash, new_balance)

    def format_ledger(self, card_number: int, pin: int) -> str:
        """Ledger text exactly as print_ledger writes it"""
        with self._lock:
            identity, account = self._lookup(card_number, pin, "format_ledger")
            return render_ledger(identity, account)

    def print_ledger(self, destination: Destination, card_number: int, pin: int) -> None:
        """
        Export the account ledger to a path or an open text stream.

        The identity is checked before the destination is opened, so an
        unknown account never creates a file. OSError propagates unchanged.
        """
        with self._lock:
            identity, account = self._lookup(card_number, pin, "print_ledger")
            write_ledger(destination, identity, account, encoding=self.config.ledger_encoding)

        log_action(
            self.logger, "info", "Ledger exported",
            action="print_ledger", resource=self._resource(identity),
            details={"entries": len(account.transactions)}
        )

    def _post(self, identity: CardIdentity, account: Account,
              transaction_type: TransactionType, cash: Money, new_balance: Money) -> str:
        entry = format_transaction(transaction_type, cash, new_balance)
        account.apply(new_balance, entry)

        log_action(
            self.logger, "info", f"{transaction_type.label} posted",
            action=transaction_type.value, resource=self._resource(identity),
            details={"amount": cash.to_string(), "balance": new_balance.to_string()}
        )
        return entry

    def _identity(self, card_number: int, pin: int, action: str) -> CardIdentity:
        try:
            return CardIdentity(card_number, pin)
        except InvalidArgument as e:
            log_action(self.logger, "warning", f"Rejected: {e}", action=action)
            raise

    def _lookup(self, card_number: int, pin: int, action: str) -> Tuple[CardIdentity, Account]:
        identity = self._identity(card_number, pin, action)
        account = self._accounts.get(identity)
        if account is None:
            self._reject(action, identity, "Account not found for card and PIN")
        return identity, account

    def _money(self, value: AmountLike, identity: CardIdentity, action: str) -> Money:
        try:
            return Money(value, self.currency)
        except InvalidArgument as e:
            self._reject(action, identity, str(e))

    def _positive_amount(self, value: AmountLike, identity: CardIdentity, action: str) -> Money:
        money = self._money(value, identity, action)
        if not money.is_positive():
            self._reject(action, identity, "Amount must be positive")
        return money

    def _reject(self, action: str, identity: CardIdentity, reason: str) -> None:
        log_action(
            self.logger, "warning", f"Rejected: {reason}",
            action=action, resource=self._resource(identity)
        )
        raise InvalidArgument(reason)

    @staticmethod
    def _resource(identity: CardIdentity) -> str:
        return f"card:{mask_card_number(identity.card_number)}"
