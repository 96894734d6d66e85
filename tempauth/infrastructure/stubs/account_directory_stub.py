"""In-memory stub of AccountDirectory.

NOT suitable for production use.
"""

from __future__ import annotations

from collections.abc import Iterable

from tempauth.application.ports.account_directory import AccountDirectory


class AccountDirectoryStub(AccountDirectory):
    def __init__(self, accounts: Iterable[str] = ()) -> None:
        self.accounts = set(accounts)

    def account_exists(self, account: str) -> bool:
        return account in self.accounts
