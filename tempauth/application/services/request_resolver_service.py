"""Request resolution - turn CLI options and the environment into a request.

Explicit options win. Otherwise the account defaults to the sudo caller
(SUDO_USER) and the address to the client end of the current SSH
connection (first field of SSH_CLIENT). Restore does not need an
address, because the failsafe job runs with no SSH session around it.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from tempauth.application.ports.account_directory import AccountDirectory
from tempauth.application.services.base import LoggingMixin
from tempauth.config.toggle_config import ToggleConfig
from tempauth.domain.errors.prerequisite import RequestResolutionError
from tempauth.domain.models.override_request import OverrideRequest, ToggleMode

SUDO_USER_ENV = "SUDO_USER"
SSH_CLIENT_ENV = "SSH_CLIENT"


class RequestResolverService(LoggingMixin):
    """Resolves and validates an OverrideRequest."""

    def __init__(
        self,
        config: ToggleConfig,
        account_directory: AccountDirectory,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._config = config
        self._accounts = account_directory
        self._environ = environ if environ is not None else os.environ
        self._init_logger(component="cli")

    def resolve(
        self,
        mode: ToggleMode,
        account: str | None = None,
        address: str | None = None,
    ) -> OverrideRequest:
        """Build the request for ``mode``.

        Args:
            mode: DISABLE or RESTORE.
            account: Explicit account, or None to use SUDO_USER.
            address: Explicit IP/CIDR, or None to use SSH_CLIENT.

        Returns:
            The validated, immutable request.

        Raises:
            RequestResolutionError: If the account or address cannot be
                resolved, the account does not exist, or a value is invalid.
        """
        resolved_account = account or self._environ.get(SUDO_USER_ENV, "")
        if not resolved_account:
            raise RequestResolutionError("Could not resolve username", field="account")

        resolved_address = address or self._address_from_ssh_client()
        if mode == ToggleMode.DISABLE and not resolved_address:
            raise RequestResolutionError(
                "Could not resolve ip address of this connection; pass --addr",
                field="address",
            )

        try:
            request = OverrideRequest(
                account=resolved_account,
                address=resolved_address,
                factor_path=self._config.factor_path_for(resolved_account),
                fragment_path=self._config.fragment_path_for(resolved_account),
                mode=mode,
            )
        except ValueError as e:
            raise RequestResolutionError(str(e)) from e

        # Looked up after validation so an invalid name never reaches pwd
        if not self._accounts.account_exists(request.account):
            raise RequestResolutionError(
                f"User {request.account} does not exist", field="account"
            )

        self._log_operation("resolve", account=request.account).debug(
            "request_resolved", **request.to_dict()
        )
        return request

    def _address_from_ssh_client(self) -> str | None:
        # SSH_CLIENT is "<client ip> <client port> <server port>"
        fields = self._environ.get(SSH_CLIENT_ENV, "").split()
        return fields[0] if fields else None
