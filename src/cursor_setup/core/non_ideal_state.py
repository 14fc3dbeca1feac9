"""Non-ideal results returned by core operations.

Core operations return these instead of raising for expected failures
(network down, bad download, busy file). Callers narrow with isinstance()
and show `message` to the operator.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


class NonIdealState(ABC):
    """Base class for expected failure results."""

    @property
    @abstractmethod
    def message(self) -> str: ...


@dataclass(frozen=True)
class NetworkUnreachable(NonIdealState):
    host: str

    @property
    def message(self) -> str:
        return f"No network connectivity (could not reach {self.host})"


@dataclass(frozen=True)
class VersionNotFound(NonIdealState):
    urls: tuple[str, ...]

    @property
    def message(self) -> str:
        return f"No version string found in content from: {', '.join(self.urls)}"


@dataclass(frozen=True)
class MirrorsExhausted(NonIdealState):
    errors: tuple[tuple[str, str], ...]  # (url, last error)

    @property
    def message(self) -> str:
        lines = ["All version sources failed:"]
        lines.extend(f"  {url}: {error}" for url, error in self.errors)
        return "\n".join(lines)


@dataclass(frozen=True)
class DownloadFailed(NonIdealState):
    url: str
    reason: str

    @property
    def message(self) -> str:
        return f"Download from {self.url} failed: {self.reason}"


@dataclass(frozen=True)
class InstallFailed(NonIdealState):
    step: str
    reason: str

    @property
    def message(self) -> str:
        return f"Install step '{self.step}' failed: {self.reason}"


@dataclass(frozen=True)
class InstallCancelled(NonIdealState):
    reason: str

    @property
    def message(self) -> str:
        return f"Installation cancelled: {self.reason}"


VersionFetchFailure = NetworkUnreachable | VersionNotFound | MirrorsExhausted
