"""Tests for freepo.report: built-in renderer and external generator runner."""

import sys
from pathlib import Path

import pytest

from freepo.config.models import ReportConfig
from freepo.report.builtin import is_binary_file, render_file_map, render_report
from freepo.report.runner import ReportError, ReportRunner, write_path_list

from conftest import make_tree


def _py(code: str) -> list[str]:
    return [sys.executable, "-c", code]


# ── built-in renderer ───────────────────────────────────────────────


class TestFileMap:
    def test_merges_paths_into_one_sorted_tree(self, tmp_path):
        root = make_tree(tmp_path / "proj", {"b.py": "", "a": {"z.txt": ""}})
        text = render_file_map([str(root / "b.py"), str(root / "a" / "z.txt")])
        lines = text.splitlines()
        assert lines[-3].endswith("── a")
        assert lines[-2].endswith("└── z.txt")
        assert lines[-1].endswith("└── b.py")
        assert lines[0] == "└── " + tmp_path.parts[1]

    def test_missing_paths_skipped(self, tmp_path, caplog):
        assert render_file_map([str(tmp_path / "nope")]) == ""
        assert "does not exist" in caplog.text

    def test_branch_glyphs(self, tmp_path):
        root = make_tree(tmp_path / "p", {"a.txt": "", "b.txt": ""})
        text = render_file_map([str(root / "a.txt"), str(root / "b.txt")])
        assert "├── a.txt" in text
        assert "└── b.txt" in text


class TestRenderReport:
    def test_sections_and_fences(self, tmp_path):
        root = make_tree(tmp_path / "p", {"main.py": "print(1)", "Makefile": "all:\n"})
        report = render_report([str(root), str(root / "main.py"), str(root / "Makefile")])
        assert report.startswith("<codex>\n<file_map>\n")
        assert report.endswith("</file_contents>\n</codex>\n")
        assert f'<file path="{root / "main.py"}">\n```py\nprint(1)\n```\n</file>\n' in report
        assert f'<file path="{root / "Makefile"}">\n```text\nall:\n```\n</file>\n' in report

    def test_directories_only_in_file_map(self, tmp_path):
        root = make_tree(tmp_path / "p", {"sub": {}})
        report = render_report([str(root / "sub")])
        assert "── sub" in report
        assert "<file path=" not in report

    def test_binary_file_placeholder(self, tmp_path):
        blob = tmp_path / "blob.bin"
        blob.write_bytes(b"abc\x00def")
        assert is_binary_file(blob) is True
        assert "[Binary file]" in render_report([str(blob)])

    def test_text_file_not_binary(self, tmp_path):
        text = tmp_path / "t.txt"
        text.write_text("hello")
        assert is_binary_file(text) is False


# ── ReportRunner ────────────────────────────────────────────────────


def test_write_path_list(tmp_path):
    path = write_path_list(["/a", "/b"], directory=str(tmp_path))
    assert path.name.startswith("freepo-paths-")
    assert path.read_text() == "/a\n/b"


class TestReportRunner:
    def test_builtin_when_no_command(self, tmp_path):
        f = tmp_path / "x.txt"
        f.write_text("content")
        report = ReportRunner().generate([str(f)])
        assert "<codex>" in report
        assert "content" in report

    def test_external_command_receives_path_file(self, tmp_path):
        cfg = ReportConfig(command=_py("import sys; print(open(sys.argv[1]).read().upper())"))
        assert ReportRunner(cfg).generate(["/a/b", "/c"]) == "/A/B\n/C\n"

    def test_path_file_removed_afterwards(self, tmp_path):
        cfg = ReportConfig(command=_py("import sys; print(sys.argv[1])"))
        used = ReportRunner(cfg).generate(["/a"]).strip()
        assert not Path(used).exists()

    def test_path_file_removed_on_failure(self, tmp_path):
        record = tmp_path / "used.txt"
        code = f"import sys; open({str(record)!r}, 'w').write(sys.argv[1]); sys.exit(3)"
        with pytest.raises(ReportError):
            ReportRunner(ReportConfig(command=_py(code))).generate(["/a"])
        assert not Path(record.read_text()).exists()

    def test_stderr_surfaces_as_error(self):
        cfg = ReportConfig(command=_py("import sys; sys.stderr.write('bad path list')"))
        with pytest.raises(ReportError, match="bad path list"):
            ReportRunner(cfg).generate(["/a"])

    def test_nonzero_exit_surfaces_stderr(self):
        code = "import sys; sys.stderr.write('Usage: gen <file>'); sys.exit(1)"
        with pytest.raises(ReportError, match="Usage: gen <file>") as exc_info:
            ReportRunner(ReportConfig(command=_py(code))).generate(["/a"])
        assert exc_info.value.returncode == 1

    def test_nonzero_exit_without_stderr(self):
        with pytest.raises(ReportError, match="status 2"):
            ReportRunner(ReportConfig(command=_py("import sys; sys.exit(2)"))).generate([])

    def test_missing_executable(self, tmp_path):
        cfg = ReportConfig(command=[str(tmp_path / "no-such-generator")])
        with pytest.raises(ReportError, match="not found"):
            ReportRunner(cfg).generate(["/a"])

    def test_timeout(self):
        cfg = ReportConfig(command=_py("import time; time.sleep(5)"), timeout=1)
        with pytest.raises(ReportError, match="timed out"):
            ReportRunner(cfg).generate(["/a"])
