"""Account lookups against the system user database (NSS via pwd)."""

import pwd

from tempauth.application.ports.account_directory import AccountDirectory


class PasswdAccountDirectory(AccountDirectory):
    def account_exists(self, account: str) -> bool:
        try:
            pwd.getpwnam(account)
        except KeyError:
            return False
        return True
