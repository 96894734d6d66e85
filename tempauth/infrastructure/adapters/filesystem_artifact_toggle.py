"""Filesystem adapter for the two "2FA disabled" artifacts.

Artifacts:
- ~<account>/.google_authenticator renamed to
  ~<account>/.google_authenticator_tmp_disabled. Without the file the PAM
  module (configured with ``nullok``) lets the account in without a code.
- /etc/ssh/sshd_config.d/tmp_disabled_2fa_for_<account>.conf, a Match
  block allowing password-only logins for the account from one address.

Only presence matters. The factor file's content is never read.
"""

from __future__ import annotations

import os
from pathlib import Path

from tempauth.application.ports.artifact_toggle import ArtifactToggle
from tempauth.domain.errors.toggle import (
    FactorStateMissingError,
    NotDisabledError,
    PolicyFragmentMissingError,
    StaleOverrideError,
    ToggleError,
)
from tempauth.domain.models.override_request import OverrideRequest
from tempauth.domain.models.toggle_state import ToggleState
from tempauth.infrastructure.observability.logging import get_logger_for_adapter

# sshd refuses include files writable by others
FRAGMENT_FILE_MODE = 0o644


def _present(path: Path) -> bool:
    # lexists: a dangling symlink still occupies the name
    return os.path.lexists(path)


class FilesystemArtifactToggle(ArtifactToggle):
    """Applies and reverts the artifacts with single filesystem calls.

    POSIX rename() silently replaces an existing target, so both renames
    check the target first. The check-then-rename window is accepted: the
    tool assumes one in-flight toggle per account.
    """

    def __init__(self) -> None:
        self._log = get_logger_for_adapter("filesystem_artifacts")

    async def apply_factor_override(self, request: OverrideRequest) -> None:
        source = request.factor_path
        target = request.disabled_factor_path
        if _present(target):
            raise StaleOverrideError(target)
        try:
            os.rename(source, target)
        except FileNotFoundError:
            raise FactorStateMissingError(source) from None
        except OSError as e:
            raise ToggleError(f"Could not suffix factor-state file ({e.strerror})", source) from e
        self._log.info("factor_override_applied", account=request.account, path=str(target))

    async def revert_factor_override(self, request: OverrideRequest) -> None:
        source = request.disabled_factor_path
        target = request.factor_path
        if not _present(source):
            raise NotDisabledError(source, account=request.account)
        if _present(target):
            # Never clobber a factor file the user has regenerated meanwhile
            raise ToggleError("Factor-state file already present", target)
        try:
            os.rename(source, target)
        except OSError as e:
            raise ToggleError(f"Could not restore factor-state file ({e.strerror})", source) from e
        self._log.info("factor_override_reverted", account=request.account, path=str(target))

    async def write_policy_fragment(self, request: OverrideRequest) -> None:
        path = request.fragment_path
        try:
            content = request.render_policy_fragment()
        except ValueError as e:
            raise ToggleError(str(e), path) from e
        try:
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FRAGMENT_FILE_MODE)
            with os.fdopen(fd, "w") as f:
                f.write(content)
        except OSError as e:
            raise ToggleError(f"Could not write policy fragment ({e.strerror})", path) from e
        self._log.info(
            "policy_fragment_written",
            account=request.account,
            address=request.address,
            path=str(path),
        )

    async def remove_policy_fragment(self, request: OverrideRequest) -> None:
        path = request.fragment_path
        try:
            path.unlink()
        except FileNotFoundError:
            raise PolicyFragmentMissingError(path) from None
        except OSError as e:
            raise ToggleError(f"Could not remove policy fragment ({e.strerror})", path) from e
        self._log.info("policy_fragment_removed", account=request.account, path=str(path))

    async def state(self, request: OverrideRequest) -> ToggleState:
        return ToggleState.from_artifacts(
            override_present=_present(request.disabled_factor_path),
            fragment_present=_present(request.fragment_path),
        )
