"""Desktop and system integration artifacts.

Each function regenerates one artifact from scratch; none of them inspect
what was there before.
"""

import logging
import shlex
import stat
from pathlib import Path

from cursor_setup.core.context import CursorSetupContext
from cursor_setup.gateway.http.abc import HttpError

logger = logging.getLogger(__name__)

DESKTOP_NAME = "Cursor"
LAUNCH_FLAG = "--no-sandbox"
APPARMOR_PROFILE_NAME = "cursor-appimage"


def _desktop_exec_arg(path: Path) -> str:
    text = str(path)
    if any(c in text for c in ' \t"\'\\$`'):
        escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("$", "\\$")
        escaped = escaped.replace("`", "\\`")
        return f'"{escaped}"'
    return text


def render_desktop_entry(artifact: Path, icon_path: Path) -> str:
    return (
        "[Desktop Entry]\n"
        f"Name={DESKTOP_NAME}\n"
        "Comment=The AI Code Editor\n"
        f"Exec={_desktop_exec_arg(artifact)} {LAUNCH_FLAG} %F\n"
        f"Icon={icon_path}\n"
        "Type=Application\n"
        "Terminal=false\n"
        "Categories=Utility;Development;\n"
        "StartupWMClass=Cursor\n"
    )


def write_desktop_entries(ctx: CursorSetupContext, artifact: Path) -> list[Path]:
    """Write the launcher to the Desktop and to the applications menu."""
    content = render_desktop_entry(artifact, ctx.paths.icon_path)
    written: list[Path] = []
    for target in (ctx.paths.user_desktop_file, ctx.paths.system_desktop_file):
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        target.chmod(0o755)
        written.append(target)
    logger.debug("Desktop entries written: %s", written)
    return written


def download_icon(ctx: CursorSetupContext) -> bool:
    """Fetch the application icon. Returns False (and logs) on failure."""
    icon_path = ctx.paths.icon_path
    icon_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        ctx.http.download(ctx.config.icon_url, icon_path, timeout=ctx.config.http_timeout)
    except (HttpError, OSError) as e:
        logger.warning("Could not download icon: %s", e)
        return False
    return True


def render_wrapper_script(artifact: Path) -> str:
    return (
        "#!/usr/bin/env bash\n"
        f"# Launches the Cursor AppImage with {LAUNCH_FLAG}\n"
        f"exec {shlex.quote(str(artifact))} {LAUNCH_FLAG} \"$@\"\n"
    )


def write_wrapper_script(ctx: CursorSetupContext, artifact: Path) -> Path:
    wrapper = ctx.paths.wrapper_path
    wrapper.parent.mkdir(parents=True, exist_ok=True)
    wrapper.write_text(render_wrapper_script(artifact), encoding="utf-8")
    wrapper.chmod(wrapper.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return wrapper


def link_wrapper(ctx: CursorSetupContext) -> None:
    """Point the system-wide command at the wrapper script.

    Raises:
        RuntimeError: If the privileged symlink fails
    """
    ctx.system.sudo_symlink(ctx.paths.wrapper_path, ctx.paths.symlink_path)


def render_apparmor_profile(app_dir: Path) -> str:
    return (
        "#include <tunables/global>\n"
        "\n"
        f"profile {APPARMOR_PROFILE_NAME} flags=(attach_disconnected,mediate_deleted) {{\n"
        f"    {app_dir}/cursor-*.AppImage ix,\n"
        "    /etc/{passwd,group,shadow} r,\n"
        "    /usr/bin/env rix,\n"
        "    /usr/bin/{bash,sh} rix,\n"
        "}\n"
    )


def apply_apparmor_profile(ctx: CursorSetupContext) -> None:
    """Write and reload the AppArmor profile.

    Raises:
        RuntimeError: If sudo is unavailable or a privileged command fails
    """
    if not ctx.system.sudo_validate():
        raise RuntimeError("sudo privileges are required to update the AppArmor profile")
    profile_path = ctx.paths.apparmor_profile_path
    ctx.system.sudo_write_file(profile_path, render_apparmor_profile(ctx.paths.app_dir))
    ctx.system.reload_apparmor_profile(profile_path)
