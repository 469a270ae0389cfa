import pytest

from devpilot.services import project_analyzer
from devpilot.services.project_analyzer import (
    MAX_FILE_BYTES,
    SUGGEST_CI,
    SUGGEST_ESLINT,
    SUGGEST_MODULARIZE,
    SUGGEST_README,
    SUGGEST_TESTS,
    SUGGEST_TYPESCRIPT,
    SUGGEST_WELL_STRUCTURED,
    analyze_project,
    build_project_prompt,
    file_extension,
)


def _write(root, relative, content=""):
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


def test_counts_histogram_and_largest_files(tmp_path):
    _write(tmp_path, "README.md", "# demo\n")
    _write(tmp_path, "src/app.py", "x" * 300)
    _write(tmp_path, "src/util.py", "y" * 100)
    _write(tmp_path, "src/web/index.ts", "z" * 50)
    _write(tmp_path, "poetry.lock", "l" * 1000)

    analysis = analyze_project(str(tmp_path))

    assert analysis.total_files == 5
    # root, src, src/web
    assert analysis.total_directories == 3
    assert [(stat.extension, stat.count) for stat in analysis.file_types] == [
        ("py", 2),
        ("md", 1),
        ("ts", 1),
    ]
    assert [info.path for info in analysis.largest_files][:3] == [
        "poetry.lock",
        "src/app.py",
        "src/util.py",
    ]
    assert analysis.largest_files[0].size == 1000


def test_ignored_directories_are_skipped(tmp_path):
    _write(tmp_path, "main.js", "console.log(1)")
    _write(tmp_path, "node_modules/left-pad/index.js", "module.exports = 1")
    _write(tmp_path, ".git/HEAD", "ref: refs/heads/main")
    _write(tmp_path, "__pycache__/mod.cpython-312.pyc", "")

    analysis = analyze_project(str(tmp_path))

    assert analysis.total_files == 1
    assert analysis.total_directories == 1
    assert all("node_modules" not in info.path for info in analysis.largest_files)


def test_root_inside_ignored_name_is_still_scanned(tmp_path):
    root = tmp_path / "build" / "project"
    _write(root, "main.py", "print(1)")

    analysis = analyze_project(str(root))

    assert analysis.total_files == 1


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("app.py", "py"),
        ("bundle.min.js", None),
        ("styles.min.css", None),
        ("app.js.map", None),
        ("Cargo.lock", None),
        ("debug.log", None),
        ("Makefile", None),
        (".gitignore", None),
        ("archive.tar.gz", "gz"),
    ],
)
def test_file_extension(filename, expected):
    assert file_extension(filename) == expected


def test_histogram_is_capped_at_ten(tmp_path):
    for index in range(12):
        _write(tmp_path, f"file{index}.ext{index}")

    analysis = analyze_project(str(tmp_path))

    assert len(analysis.file_types) == 10


def test_largest_files_capped_at_ten(tmp_path):
    for index in range(15):
        _write(tmp_path, f"f{index:02d}.txt", "x" * index)

    analysis = analyze_project(str(tmp_path))

    assert len(analysis.largest_files) == 10
    sizes = [info.size for info in analysis.largest_files]
    assert sizes == sorted(sizes, reverse=True)


def test_small_documented_project_is_well_structured(tmp_path):
    _write(tmp_path, "README.md", "# ok")
    _write(tmp_path, "main.py", "print('hi')")

    analysis = analyze_project(str(tmp_path))

    assert analysis.suggestions == [SUGGEST_WELL_STRUCTURED]


def test_suggestions_for_large_untested_javascript_project(tmp_path):
    for index in range(101):
        _write(tmp_path, f"src/module{index}.js", "export default 1")

    analysis = analyze_project(str(tmp_path))

    assert analysis.suggestions == [
        SUGGEST_TESTS,
        SUGGEST_README,
        SUGGEST_TYPESCRIPT,
        SUGGEST_ESLINT,
        SUGGEST_MODULARIZE,
        SUGGEST_CI,
    ]


def test_tests_eslint_and_ci_silence_their_suggestions(tmp_path):
    for index in range(60):
        _write(tmp_path, f"src/module{index}.ts", "export {}")
    _write(tmp_path, "src/module0.spec.ts", "it('works', () => {})")
    _write(tmp_path, ".eslintrc.json", "{}")
    _write(tmp_path, ".github/workflows/ci.yml", "on: push")
    _write(tmp_path, "README.md", "# ok")

    analysis = analyze_project(str(tmp_path))

    assert analysis.suggestions == [SUGGEST_WELL_STRUCTURED]


def test_summary_embeds_config_and_sampled_sources(tmp_path):
    _write(tmp_path, "pyproject.toml", '[project]\nname = "demo"\n')
    _write(tmp_path, "src/demo/core.py", "def run():\n    return 42\n")
    _write(tmp_path, "src/demo/big.py", "#" * (MAX_FILE_BYTES + 10))

    summary = analyze_project(str(tmp_path)).summary

    assert summary.startswith(f"# Project: {tmp_path.name}")
    assert "## Configuration files" in summary
    assert 'name = "demo"' in summary
    assert "### src/demo/core.py" in summary
    assert "def run():" in summary
    assert "... [truncated 10 bytes]" in summary


def test_summary_caps_sampled_files(tmp_path, monkeypatch):
    monkeypatch.setattr(project_analyzer, "MAX_SAMPLED_FILES", 2)
    for index in range(5):
        _write(tmp_path, f"m{index}.py", f"value = {index}\n")

    summary = analyze_project(str(tmp_path)).summary

    assert summary.count("### m") == 2
    assert "_3 more source files not shown._" in summary


def test_missing_root_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        analyze_project(str(tmp_path / "nope"))


def test_file_root_raises(tmp_path):
    path = _write(tmp_path, "file.txt", "x")

    with pytest.raises(NotADirectoryError):
        analyze_project(str(path))


def test_defaults_to_current_directory(tmp_path, monkeypatch):
    _write(tmp_path, "only.py", "pass")
    monkeypatch.chdir(tmp_path)

    assert analyze_project().total_files == 1


def test_build_project_prompt_prefixes_summary(tmp_path):
    _write(tmp_path, "main.py", "print(1)")
    analysis = analyze_project(str(tmp_path))

    prompt = build_project_prompt("Where is the entry point?", analysis)

    assert prompt.startswith("Project context:\n\n# Project:")
    assert prompt.endswith("Where is the entry point?")


def test_summary_reads_at_most_the_byte_budget(tmp_path, monkeypatch):
    _write(tmp_path, "src/huge.py", "#" * (MAX_FILE_BYTES * 50))
    requested = []
    real_open = project_analyzer.Path.open

    class _CountingHandle:
        def __init__(self, handle):
            self._handle = handle

        def __enter__(self):
            return self

        def __exit__(self, *exc_info):
            self._handle.close()

        def read(self, size=-1):
            requested.append(size)
            return self._handle.read(size)

    def counting_open(self, *args, **kwargs):
        return _CountingHandle(real_open(self, *args, **kwargs))

    monkeypatch.setattr(project_analyzer.Path, "open", counting_open)

    summary = analyze_project(str(tmp_path)).summary

    assert requested == [MAX_FILE_BYTES + 1]
    assert f"... [truncated {MAX_FILE_BYTES * 49} bytes]" in summary
