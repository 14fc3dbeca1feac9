"""Application context with dependency injection."""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from cursor_setup.core.config import SetupConfig, default_config_path, load_config
from cursor_setup.core.environment import (
    OS_RELEASE_PATH,
    Architecture,
    SetupPaths,
    build_paths,
    detect_architecture,
    resolve_real_home,
)
from cursor_setup.gateway.console.abc import Console
from cursor_setup.gateway.console.real import RealConsole
from cursor_setup.gateway.http.abc import HttpClient
from cursor_setup.gateway.http.real import RealHttpClient
from cursor_setup.gateway.system.abc import System
from cursor_setup.gateway.system.real import RealSystem
from cursor_setup.gateway.time.abc import Time
from cursor_setup.gateway.time.real import RealTime


@dataclass(frozen=True)
class CursorSetupContext:
    """Immutable context holding all dependencies for installer operations.

    Created at CLI entry point and threaded through the application.
    Frozen to prevent accidental modification at runtime.
    """

    config: SetupConfig
    paths: SetupPaths
    architecture: Architecture
    http: HttpClient
    system: System
    console: Console
    time: Time
    os_release_path: Path


def create_context(environ: Mapping[str, str] | None = None) -> CursorSetupContext:
    """Create production context with real implementations.

    Raises:
        ConfigError: If configuration values are malformed
        ValueError: If the CPU architecture is unsupported
    """
    env = environ if environ is not None else os.environ
    real_home = resolve_real_home(env)
    config = load_config(default_config_path(real_home, env), env)
    return CursorSetupContext(
        config=config,
        paths=build_paths(real_home, config.language),
        architecture=detect_architecture(),
        http=RealHttpClient(),
        system=RealSystem(),
        console=RealConsole(),
        time=RealTime(),
        os_release_path=OS_RELEASE_PATH,
    )


def context_for_test(
    root: Path,
    *,
    config: SetupConfig | None = None,
    http: HttpClient | None = None,
    system: System | None = None,
    console: Console | None = None,
    time: Time | None = None,
    architecture: Architecture | None = None,
) -> CursorSetupContext:
    """Create a context whose paths all live under `root`, with fake gateways.

    Privileged locations (/usr/local/bin, /etc/apparmor.d) are also moved under
    `root`; the fake System only records what would be written there.
    The os-release path points at `root`/etc/os-release, which callers create
    when a test needs the OS check to pass.
    """
    from cursor_setup.gateway.console.fake import FakeConsole
    from cursor_setup.gateway.http.fake import FakeHttpClient
    from cursor_setup.gateway.system.fake import FakeSystem
    from cursor_setup.gateway.time.fake import FakeTime

    resolved_config = config if config is not None else SetupConfig()
    return CursorSetupContext(
        config=resolved_config,
        paths=build_paths(
            root / "home",
            resolved_config.language,
            system_bin_dir=root / "usr" / "local" / "bin",
            apparmor_dir=root / "etc" / "apparmor.d",
        ),
        architecture=(
            architecture if architecture is not None else Architecture(arch="x64", machine="x86_64")
        ),
        http=http if http is not None else FakeHttpClient(),
        system=system if system is not None else FakeSystem(),
        console=console if console is not None else FakeConsole(is_interactive=True),
        time=time if time is not None else FakeTime(),
        os_release_path=root / "etc" / "os-release",
    )
