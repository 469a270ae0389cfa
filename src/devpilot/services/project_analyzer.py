"""Shallow static analysis of a project directory.

The result feeds the prompt augmentation flow: ``summary`` is a markdown blob
embedding configuration files and a bounded sample of source files.
"""

from __future__ import annotations

import os
from collections import Counter
from pathlib import Path

import structlog

from ..models import FileInfo, FileTypeStat, ProjectAnalysis

logger = structlog.get_logger(__name__)

IGNORED_DIRS = frozenset(
    {
        "node_modules",
        "target",
        "dist",
        "build",
        ".git",
        ".next",
        ".nuxt",
        "__pycache__",
        "venv",
        ".venv",
        "vendor",
    }
)

IGNORED_EXTENSIONS = ("lock", "log", "tmp", "temp", "cache", "min.js", "min.css", "map")

CONFIG_FILES = (
    "package.json",
    "pyproject.toml",
    "requirements.txt",
    "Cargo.toml",
    "go.mod",
    "tsconfig.json",
    "setup.py",
    "setup.cfg",
    "composer.json",
    "pom.xml",
    "build.gradle",
    "Dockerfile",
)

SOURCE_EXTENSIONS = frozenset(
    {
        "py", "js", "jsx", "ts", "tsx", "rs", "go", "java", "kt", "rb", "php",
        "c", "h", "cpp", "hpp", "cs", "swift", "vue", "svelte",
    }
)

TOP_FILE_TYPES = 10
TOP_LARGEST_FILES = 10
MAX_SAMPLED_FILES = 20
MAX_FILE_BYTES = 8000

TEST_DIRS = frozenset({"tests", "test", "__tests__", "spec"})

SUGGEST_TESTS = "Consider adding automated tests to safeguard code quality."
SUGGEST_README = "Add a README.md to document the project and ease onboarding."
SUGGEST_TYPESCRIPT = "Migrating to TypeScript can improve maintainability and prevent bugs."
SUGGEST_ESLINT = "Configure ESLint to keep the code consistent and catch problems early."
SUGGEST_MODULARIZE = "Large project detected. Consider splitting the code into smaller packages."
SUGGEST_CI = "Set up CI/CD (GitHub Actions, GitLab CI) to automate tests and deploys."
SUGGEST_WELL_STRUCTURED = "Well structured project! Keep following good development practices."


def analyze_project(root_path: str | None = None) -> ProjectAnalysis:
    root = Path(root_path) if root_path else Path.cwd()
    if not root.exists():
        raise FileNotFoundError(f"Project path does not exist: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Project path is not a directory: {root}")

    total_directories = 0
    file_types: Counter[str] = Counter()
    sized_files: list[tuple[str, int]] = []
    names: list[str] = []
    has_test_dir = False

    for dirpath, dirnames, filenames in os.walk(root):
        total_directories += 1
        dirnames[:] = sorted(d for d in dirnames if d not in IGNORED_DIRS)
        current = Path(dirpath)
        if current != root and current.name in TEST_DIRS:
            has_test_dir = True

        for filename in sorted(filenames):
            path = current / filename
            if not path.is_file():
                continue
            names.append(filename)
            extension = file_extension(filename)
            if extension:
                file_types[extension] += 1
            try:
                size = path.stat().st_size
            except OSError:
                continue
            sized_files.append((path.relative_to(root).as_posix(), size))

    file_type_stats = [
        FileTypeStat(extension=extension, count=count)
        for extension, count in sorted(file_types.items(), key=lambda item: (-item[1], item[0]))
    ][:TOP_FILE_TYPES]

    sized_files.sort(key=lambda item: (-item[1], item[0]))
    largest_files = [
        FileInfo(path=path, size=size) for path, size in sized_files[:TOP_LARGEST_FILES]
    ]

    total_files = len(names)
    has_tests = has_test_dir or any(is_test_file(name) for name in names)
    has_eslint = any("eslint" in name.lower() for name in names)
    suggestions = generate_suggestions(
        total_files, file_types, has_tests=has_tests, has_eslint=has_eslint
    )

    source_paths = sorted(path for path, _ in sized_files)
    summary = render_summary(
        root,
        total_files=total_files,
        total_directories=total_directories,
        file_types=file_type_stats,
        largest_files=largest_files,
        source_paths=source_paths,
    )

    logger.info(
        "project.analyzed",
        root=str(root),
        total_files=total_files,
        total_directories=total_directories,
    )
    return ProjectAnalysis(
        total_files=total_files,
        total_directories=total_directories,
        file_types=file_type_stats,
        largest_files=largest_files,
        suggestions=suggestions,
        summary=summary,
    )


def file_extension(filename: str) -> str | None:
    """Histogram key for ``filename``, or None when it has none or is ignored."""

    lowered = filename.lower()
    if any(lowered.endswith(f".{ignored}") for ignored in IGNORED_EXTENSIONS):
        return None
    suffix = Path(filename).suffix
    if not suffix:
        return None
    return suffix[1:]


def is_test_file(filename: str) -> bool:
    lowered = filename.lower()
    stem = lowered.rsplit(".", 1)[0]
    return (
        (lowered.startswith("test_") and lowered.endswith(".py"))
        or stem.endswith("_test")
        or ".test." in lowered
        or ".spec." in lowered
    )


def generate_suggestions(
    total_files: int,
    file_types: Counter[str],
    *,
    has_tests: bool,
    has_eslint: bool,
) -> list[str]:
    suggestions: list[str] = []

    if not has_tests and total_files > 20:
        suggestions.append(SUGGEST_TESTS)

    if not file_types["md"]:
        suggestions.append(SUGGEST_README)

    has_typescript = bool(file_types["ts"] or file_types["tsx"])
    has_javascript = bool(file_types["js"] or file_types["jsx"])
    if has_javascript and not has_typescript and total_files > 30:
        suggestions.append(SUGGEST_TYPESCRIPT)

    if not has_eslint and (has_typescript or has_javascript):
        suggestions.append(SUGGEST_ESLINT)

    if total_files > 100:
        suggestions.append(SUGGEST_MODULARIZE)

    has_ci = bool(file_types["yml"] or file_types["yaml"])
    if not has_ci and total_files > 50:
        suggestions.append(SUGGEST_CI)

    if not suggestions:
        suggestions.append(SUGGEST_WELL_STRUCTURED)

    return suggestions


def render_summary(
    root: Path,
    *,
    total_files: int,
    total_directories: int,
    file_types: list[FileTypeStat],
    largest_files: list[FileInfo],
    source_paths: list[str],
) -> str:
    lines = [
        f"# Project: {root.resolve().name}",
        "",
        f"- Files: {total_files}",
        f"- Directories: {total_directories}",
        "",
        "## File types",
        "",
    ]
    lines.extend(f"- .{stat.extension}: {stat.count}" for stat in file_types)
    lines += ["", "## Largest files", ""]
    lines.extend(f"- {info.path} ({info.size} bytes)" for info in largest_files)

    config_paths = [name for name in CONFIG_FILES if (root / name).is_file()]
    if config_paths:
        lines += ["", "## Configuration files"]
        for name in config_paths:
            lines += _embed_file(root, name)

    sampled = [
        path
        for path in source_paths
        if file_extension(path) in SOURCE_EXTENSIONS and path not in config_paths
    ]
    if sampled:
        lines += ["", "## Source files"]
        for relative in sampled[:MAX_SAMPLED_FILES]:
            lines += _embed_file(root, relative)
        if len(sampled) > MAX_SAMPLED_FILES:
            lines += ["", f"_{len(sampled) - MAX_SAMPLED_FILES} more source files not shown._"]

    return "\n".join(lines) + "\n"


def _embed_file(root: Path, relative: str) -> list[str]:
    path = root / relative
    try:
        with path.open("rb") as handle:
            # One byte past the budget is enough to know the file was cut.
            raw = handle.read(MAX_FILE_BYTES + 1)
        size = path.stat().st_size
    except OSError:
        return []
    text = raw[:MAX_FILE_BYTES].decode("utf-8", errors="replace")
    block = ["", f"### {relative}", "", f"```{file_extension(relative) or ''}", text.rstrip("\n")]
    if len(raw) > MAX_FILE_BYTES:
        block.append(f"... [truncated {max(size - MAX_FILE_BYTES, 1)} bytes]")
    block.append("```")
    return block


def build_project_prompt(prompt: str, analysis: ProjectAnalysis) -> str:
    """Prefix ``prompt`` with the project summary so the model sees the codebase."""

    return f"Project context:\n\n{analysis.summary}\n---\n\n{prompt}"
