"""Override request domain model.

An OverrideRequest is the fully resolved input to every core operation:
which account, from which address, and where its two artifacts live.
It is built once by the request resolver and never changes afterwards.
"""

from __future__ import annotations

import ipaddress
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

# Suffix appended to the factor-state file while the second factor is off
DISABLED_SUFFIX = "_tmp_disabled"

# Anything useradd or a directory service may hand out, minus whitespace,
# path separators and the sshd Match pattern characters (* ? ! , ")
_ACCOUNT_PATTERN = re.compile(r"^[A-Za-z0-9_.][A-Za-z0-9_.@$-]{0,255}$")

_FRAGMENT_TEMPLATE = (
    "Match User {account} Address {address}\n"
    "    PasswordAuthentication yes\n"
    "    AuthenticationMethods password\n"
)


class ToggleMode(Enum):
    """Which saga the request is for."""

    DISABLE = "disable"
    RESTORE = "restore"


@dataclass(frozen=True, eq=True)
class OverrideRequest:
    """A resolved request to disable or restore the second factor.

    Attributes:
        account: Login name of the account.
        address: Source IP or CIDR the exemption is scoped to. Required for
            DISABLE; may be None for RESTORE, which never writes a fragment.
        factor_path: Path of the factor-state file (~/.google_authenticator).
        fragment_path: Path of the sshd include fragment for this account.
        mode: DISABLE or RESTORE.
    """

    account: str
    address: str | None
    factor_path: Path
    fragment_path: Path
    mode: ToggleMode

    def __post_init__(self) -> None:
        """Validate request fields."""
        if not _ACCOUNT_PATTERN.fullmatch(self.account) or set(self.account) == {"."}:
            raise ValueError(f"invalid account name: {self.account!r}")
        if self.address is not None:
            try:
                ipaddress.ip_network(self.address, strict=False)
            except ValueError as e:
                raise ValueError(f"invalid address or CIDR: {self.address!r}") from e
        elif self.mode == ToggleMode.DISABLE:
            raise ValueError("address is required to disable 2FA")

    @property
    def disabled_factor_path(self) -> Path:
        """Path the factor-state file is moved to while disabled."""
        return self.factor_path.with_name(self.factor_path.name + DISABLED_SUFFIX)

    def render_policy_fragment(self) -> str:
        """Render the sshd Match block scoped to this account and address.

        Returns:
            The three-line fragment, newline terminated.

        Raises:
            ValueError: If the request has no address.
        """
        if self.address is None:
            raise ValueError("cannot render a policy fragment without an address")
        return _FRAGMENT_TEMPLATE.format(account=self.account, address=self.address)

    def to_dict(self) -> dict[str, str | None]:
        """Serialize for logging and the dry-run listing."""
        return {
            "account": self.account,
            "address": self.address,
            "factor_path": str(self.factor_path),
            "fragment_path": str(self.fragment_path),
            "mode": self.mode.value,
        }
