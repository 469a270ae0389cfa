"""Filesystem, process and environment commands used by the desktop shell."""

from __future__ import annotations

import asyncio
import platform
import shlex
from pathlib import Path

import structlog

from ..models import DirectoryListing, FileNode, SystemInfo
from ..settings import APP_VERSION, Settings
from .project_analyzer import IGNORED_DIRS

logger = structlog.get_logger(__name__)

GITHUB_TOKEN_PREFIXES = ("ghp_", "github_pat_")

_PLATFORM_NAMES = {"darwin": "macos"}

_editor_reapers: set[asyncio.Future[int]] = set()


class CommandError(RuntimeError):
    """Raised when a workspace command cannot complete."""


def list_directory(path: str | None = None) -> DirectoryListing:
    root = Path(path) if path else Path.cwd()
    return DirectoryListing(path=str(root), files=expand_directory(str(root)))


def expand_directory(path: str) -> list[FileNode]:
    """One level of ``path``: directories first, then files, by name."""

    nodes = [
        FileNode(name=entry.name, path=str(entry), is_directory=entry.is_dir())
        for entry in Path(path).iterdir()
        if not (entry.is_dir() and entry.name in IGNORED_DIRS)
    ]
    nodes.sort(key=lambda node: (not node.is_directory, node.name.lower()))
    return nodes


def read_file_content(path: str) -> str:
    return Path(path).read_text(encoding="utf-8", errors="replace")


def write_file_content(path: str, content: str) -> None:
    Path(path).write_text(content, encoding="utf-8")


async def run_terminal_command(command: str, cwd: str | None, settings: Settings) -> str:
    """Run ``command`` through the shell and return its output."""

    logger.info("workspace.command", command=command, cwd=cwd)
    process = await asyncio.create_subprocess_shell(
        command,
        cwd=cwd or None,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    try:
        stdout, stderr = await asyncio.wait_for(
            process.communicate(), timeout=settings.command_timeout_seconds
        )
    except asyncio.TimeoutError as exc:
        process.kill()
        await process.wait()
        raise CommandError(
            f"Command timed out after {settings.command_timeout_seconds:g}s: {command}"
        ) from exc

    output = stdout.decode(errors="replace")
    if stderr:
        if output and not output.endswith("\n"):
            output += "\n"
        output += stderr.decode(errors="replace")
    if process.returncode != 0:
        raise CommandError(output.strip() or f"Command exited with status {process.returncode}")
    return output


async def clone_repository(url: str, destination: str | None, settings: Settings) -> str:
    """Clone ``url`` and open the checkout in the configured editor."""

    target = Path(destination) if destination else Path.cwd() / _repository_name(url)
    process = await asyncio.create_subprocess_exec(
        "git",
        "clone",
        url,
        str(target),
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    _, stderr = await process.communicate()
    if process.returncode != 0:
        raise CommandError(f"git clone failed: {stderr.decode(errors='replace').strip()}")
    logger.info("workspace.cloned", url=url, path=str(target))

    editor = shlex.split(settings.editor_command)
    if editor:
        try:
            editor_process = await asyncio.create_subprocess_exec(
                *editor,
                str(target),
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as exc:
            # The checkout is usable even when the editor is missing.
            logger.warning(
                "workspace.editor_failed", editor=settings.editor_command, error=str(exc)
            )
        else:
            _reap_in_background(editor_process)
    return str(target)


def _reap_in_background(process: asyncio.subprocess.Process) -> None:
    # The editor runs in its own session and may outlive the command; waiting
    # on it from a task collects its exit status without blocking the caller.
    reaper = asyncio.ensure_future(process.wait())
    _editor_reapers.add(reaper)
    reaper.add_done_callback(_editor_reapers.discard)


def connect_github(token: str) -> bool:
    """Validate the token format; no request is made to GitHub."""

    if token.startswith(GITHUB_TOKEN_PREFIXES):
        return True
    raise CommandError("Invalid GitHub token. It must start with 'ghp_' or 'github_pat_'.")


def get_system_info() -> SystemInfo:
    system = platform.system().lower()
    return SystemInfo(
        platform=_PLATFORM_NAMES.get(system, system),
        arch=platform.machine().lower(),
        version=APP_VERSION,
    )


def _repository_name(url: str) -> str:
    name = url.rstrip("/").rsplit("/", 1)[-1].rsplit(":", 1)[-1]
    return name.removesuffix(".git") or "repository"
