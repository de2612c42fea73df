"""
Ledger Export Module

Renders an account's ledger (header followed by its transaction log) and
writes it to a file path or an open text stream.
"""

import os
from typing import IO, Iterable, Union

from .accounts import Account, CardIdentity


SEPARATOR = "-" * 28

Destination = Union[str, "os.PathLike[str]", IO[str]]


def ledger_lines(identity: CardIdentity, account: Account) -> Iterable[str]:
    """Yield ledger lines without their terminating newline"""
    yield f"Name: {account.owner_name}"
    yield f"Card Number: {identity.card_number}"
    yield f"PIN: {identity.pin}"
    yield SEPARATOR
    yield from account.transactions


def render_ledger(identity: CardIdentity, account: Account) -> str:
    """Full ledger text, every line newline-terminated"""
    return "".join(f"{line}\n" for line in ledger_lines(identity, account))


def write_ledger(destination: Destination, identity: CardIdentity,
                 account: Account, encoding: str = "utf-8") -> None:
    """
    Write the ledger export

    Args:
        destination: File path (truncated if it exists) or writable text stream
        identity: Account identity printed in the header
        account: Account whose log is exported
        encoding: Encoding used when ``destination`` is a path

    Raises:
        OSError: If the destination cannot be opened or written
    """
    text = render_ledger(identity, account)

    if isinstance(destination, (str, os.PathLike)):
        with open(destination, "w", encoding=encoding, newline="") as handle:
            handle.write(text)
    else:
        destination.write(text)
        destination.flush()
