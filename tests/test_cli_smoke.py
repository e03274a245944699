import builtins
import errno
import json
from pathlib import Path

from typer.testing import CliRunner

from dirlines.infra.sources import directory_lines
from dirlines.main import app

runner = CliRunner()

ROTATED = ["messages", "messages.1", "messages.2", "messages.10", "messages.20"]


def make_rotated_dir(directory: Path) -> str:
    directory.mkdir(parents=True, exist_ok=True)
    content = []
    for name in ROTATED:
        text = "".join(f"line {n} from {name}\n" for n in ("one", "two", "three"))
        (directory / name).write_text(text, encoding="utf-8")
        content.append(text)
    return "".join(content)


def invoke(tmp_path: Path, *args: str, run_id: str = "run-1"):
    return runner.invoke(
        app,
        [
            "--log-dir",
            str(tmp_path / "logs"),
            "--report-dir",
            str(tmp_path / "reports"),
            "--run-id",
            run_id,
            *args,
        ],
    )


def read_report(tmp_path: Path, command: str, run_id: str = "run-1") -> dict:
    path = tmp_path / "reports" / f"report_{command}_{run_id}.json"
    return json.loads(path.read_text(encoding="utf-8"))


def test_help_shows_commands():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "ls" in result.stdout
    assert "cat" in result.stdout
    assert "stats" in result.stdout


def test_ls_prints_natural_order(tmp_path):
    data = tmp_path / "data"
    make_rotated_dir(data)

    result = invoke(tmp_path, "ls", str(data))

    assert result.exit_code == 0
    assert result.stdout.splitlines() == [str(data / name) for name in ROTATED]


def test_cat_prints_all_lines(tmp_path):
    data = tmp_path / "data"
    expected = make_rotated_dir(data)

    result = invoke(tmp_path, "cat", str(data))

    assert result.exit_code == 0
    assert result.stdout == expected

    report = read_report(tmp_path, "cat")
    assert report["status"] == "ok"
    assert report["summary"]["files_total"] == 5
    assert report["summary"]["lines"] == 15
    assert report["meta"]["directory"] == str(data)
    assert (tmp_path / "logs" / "cat_run-1.log").exists()


def test_stats_prints_counts(tmp_path):
    data = tmp_path / "data"
    expected = make_rotated_dir(data)

    result = invoke(tmp_path, "stats", str(data))

    assert result.exit_code == 0
    assert f"files=5 lines=15 chars={len(expected)}" in result.stdout


def test_missing_directory_exit_code_2(tmp_path):
    missing = tmp_path / "non-existent-dir"

    result = invoke(tmp_path, "cat", str(missing))

    assert result.exit_code == 2
    assert "Directory does not exist" in result.output
    report = read_report(tmp_path, "cat")
    assert report["status"] == "failed"
    assert report["error"]["code"] == "NOT_FOUND"


def test_file_instead_of_directory_exit_code_2(tmp_path):
    path = tmp_path / "messages"
    path.write_text("x\n", encoding="utf-8")

    result = invoke(tmp_path, "ls", str(path))

    assert result.exit_code == 2
    assert read_report(tmp_path, "ls")["error"]["code"] == "NOT_A_DIRECTORY"


def test_empty_directory_is_success(tmp_path):
    data = tmp_path / "empty-dir"
    data.mkdir()

    result = invoke(tmp_path, "stats", str(data))

    assert result.exit_code == 0
    assert "files=0 lines=0 chars=0" in result.stdout


def test_unknown_encoding_is_rejected(tmp_path):
    data = tmp_path / "data"
    make_rotated_dir(data)

    result = invoke(tmp_path, "--encoding", "no-such-codec", "cat", str(data))

    assert result.exit_code == 2
    assert "Unknown encoding" in result.output


def test_cat_keeps_escape_sequences(tmp_path):
    data = tmp_path / "data"
    data.mkdir()
    (data / "messages").write_text("\x1b[31mERROR\x1b[0m boom\n", encoding="utf-8")

    result = invoke(tmp_path, "cat", str(data))

    assert result.exit_code == 0
    assert result.stdout == "\x1b[31mERROR\x1b[0m boom\n"


def test_cat_exit_code_1_on_read_error(tmp_path, monkeypatch):
    data = tmp_path / "data"
    data.mkdir()
    (data / "a").write_text("a1\n", encoding="utf-8")
    (data / "b").write_text("b1\n", encoding="utf-8")

    def open_denying_b(path, mode="r", *args, **kwargs):
        if Path(path).name == "b":
            raise PermissionError(errno.EACCES, "Permission denied", str(path))
        return builtins.open(path, mode, *args, **kwargs)

    monkeypatch.setattr(directory_lines, "open", open_denying_b, raising=False)

    result = invoke(tmp_path, "cat", str(data))

    assert result.exit_code == 1
    assert result.output.startswith("a1\n")
    assert "Failed to read file" in result.output
    report = read_report(tmp_path, "cat")
    assert report["status"] == "failed"
    assert report["error"]["code"] == "FILE_READ_ERROR"
    assert report["error"]["path"] == str(data / "b")
    assert report["summary"]["lines"] == 1


def test_utf16_encoding_is_rejected(tmp_path):
    data = tmp_path / "data"
    make_rotated_dir(data)

    result = invoke(tmp_path, "--encoding", "utf-16", "cat", str(data))

    assert result.exit_code == 2
    assert "not ASCII-compatible" in result.output
