"""Install/update decision engine.

A pure function of (installed, latest). Equality is the only thing that
prevents an update; there is no downgrade protection, a lower remote version
is reported as an update flagged `is_downgrade`.
"""

from dataclasses import dataclass
from enum import Enum

from cursor_setup.core.inspector import InstalledArtifact, NoInstallation
from cursor_setup.core.non_ideal_state import NonIdealState
from cursor_setup.core.remote import RemoteRelease
from cursor_setup.core.version import AppVersion


class InstallAction(Enum):
    INSTALL = "install"
    UPDATE = "update"
    UP_TO_DATE = "up-to-date"
    ERROR = "error"


@dataclass(frozen=True)
class Decision:
    action: InstallAction
    installed: InstalledArtifact | NoInstallation
    latest: RemoteRelease | None
    message: str

    @property
    def is_downgrade(self) -> bool:
        if self.action != InstallAction.UPDATE or self.latest is None:
            return False
        if not isinstance(self.installed, InstalledArtifact):
            return False
        if not isinstance(self.installed.version, AppVersion):
            return False
        return self.latest.version < self.installed.version


def decide(
    installed: InstalledArtifact | NoInstallation,
    latest: RemoteRelease | NonIdealState,
) -> Decision:
    """Decide what to do given the installed artifact and the latest release."""
    if isinstance(latest, NonIdealState):
        return Decision(
            action=InstallAction.ERROR, installed=installed, latest=None, message=latest.message
        )

    if isinstance(installed, NoInstallation):
        return Decision(
            action=InstallAction.INSTALL,
            installed=installed,
            latest=latest,
            message=f"No previous installation detected. Version {latest.version} is available.",
        )

    if installed.version == latest.version:
        return Decision(
            action=InstallAction.UP_TO_DATE,
            installed=installed,
            latest=latest,
            message=f"Version {latest.version} is already installed.",
        )

    return Decision(
        action=InstallAction.UPDATE,
        installed=installed,
        latest=latest,
        message=f"Update available: {installed.version} -> {latest.version}.",
    )
