from __future__ import annotations

import io
from pathlib import Path

import pytest
from rich.console import Console

from filesequencer.cli.main import HELP_LINES, confirmation_question, main, parse_args
from filesequencer.config import AppConfig, RunConfig
from filesequencer.output.logger import SimpleLogger


class Captured:
    def __init__(self) -> None:
        self.out = io.StringIO()
        self.err = io.StringIO()
        self.logger = SimpleLogger(
            console=Console(file=self.out, width=400, highlight=False),
            err_console=Console(file=self.err, width=400, highlight=False),
        )
        self.questions: list[str] = []

    def answer(self, reply: bool):
        def ask(question: str) -> bool:
            self.questions.append(question)
            return reply
        return ask


@pytest.fixture
def cap() -> Captured:
    return Captured()


def run_main(argv: list[str], cap: Captured, reply: bool = True) -> int:
    return main(argv, app=AppConfig(), logger=cap.logger, ask=cap.answer(reply))


def names(directory: Path) -> set[str]:
    return {p.name for p in directory.iterdir()}


def test_parse_args_presence_flags():
    args = parse_args(["-a", "stray", "-r"])
    assert args.recursive and args.move_animated
    assert not args.show_help


def test_parse_args_matches_whole_tokens_only():
    for argv in (["-ar"], ["-rx"], ["-r=yes"], ["--r"], ["-A", "-R"]):
        args = parse_args(argv)
        assert not args.recursive
        assert not args.move_animated
        assert not args.show_help


def test_parse_args_reads_sys_argv_by_default(monkeypatch):
    monkeypatch.setattr("sys.argv", ["filesequencer", "-help", "-a"])
    args = parse_args()
    assert args.show_help and args.move_animated
    assert not args.recursive


def test_clustered_flags_do_not_enable_modes(tmp_path: Path, monkeypatch, cap: Captured):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "clip.avi").write_text("clip")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "x.png").write_text("x")

    assert run_main(["-ar", "-rx", "-r=yes"], cap) == 0

    assert names(tmp_path) == {"1.avi", "sub"}
    assert names(tmp_path / "sub") == {"x.png"}
    assert cap.questions == ["Rename files to sequential names?"]


def test_confirmation_question_plural():
    run = RunConfig(start_path=Path("/home/user/pics"), recursive=True)
    assert confirmation_question(run, 1).endswith("(RECURSIVE: 1 FOLDER AFFECTED!)")
    assert confirmation_question(run, 4).endswith("(RECURSIVE: 4 FOLDERS AFFECTED!)")
    plain = RunConfig(start_path=Path("/home/user/pics"))
    assert "RECURSIVE" not in confirmation_question(plain, 0)


def test_no_files_exits_zero_without_prompt(tmp_path: Path, monkeypatch, cap: Captured):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "notes.txt").write_text("x")

    assert run_main([], cap) == 0

    assert "Files found: 0" in cap.out.getvalue()
    assert "No files found!" in cap.out.getvalue()
    assert cap.questions == []
    assert names(tmp_path) == {"notes.txt"}


def test_bad_starting_path_exits_one(monkeypatch, cap: Captured):
    monkeypatch.chdir("/")

    assert run_main([], cap) == 1

    assert "Bad starting path: [/]" in cap.err.getvalue()
    assert cap.questions == []


def test_declined_leaves_files_untouched(tmp_path: Path, monkeypatch, cap: Captured):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "b.png").write_text("b")

    assert run_main([], cap, reply=False) == 0

    assert "Process aborted!" in cap.out.getvalue()
    assert names(tmp_path) == {"b.png"}


def test_full_run_renames_and_reports(tmp_path: Path, monkeypatch, cap: Captured):
    monkeypatch.chdir(tmp_path)
    for name in ["b.png", "3.jpg", "a.gif", "clip.webm"]:
        (tmp_path / name).write_text(name)

    assert run_main(["-a"], cap) == 0

    assert names(tmp_path) == {"1.jpg", "2.png", "3.gif", "Animated"}
    assert (tmp_path / "2.png").read_text() == "b.png"
    assert names(tmp_path / "Animated") == {"1.webm"}
    out = cap.out.getvalue()
    assert "Files found: 4" in out
    assert f"Working path: {tmp_path.resolve()}" in out
    assert "b.png -> 2.png" in out
    assert "clip.webm -> Animated/1.webm" in out
    assert "Animated moved:" in out


def test_recursive_prompt_counts_folders(tmp_path: Path, monkeypatch, cap: Captured):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "x.png").write_text("x")
    (tmp_path / "one").mkdir()
    (tmp_path / "two").mkdir()
    (tmp_path / "Animated").mkdir()

    assert run_main(["-r"], cap, reply=False) == 0

    assert cap.questions == ["Rename files to sequential names? (RECURSIVE: 2 FOLDERS AFFECTED!)"]


def test_help_prints_usage_and_continues(tmp_path: Path, monkeypatch, cap: Captured):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "z.tif").write_text("z")

    assert run_main(["-help"], cap) == 0

    out = cap.out.getvalue()
    for line in HELP_LINES:
        assert line.strip() in out
    assert names(tmp_path) == {"1.tif"}


def test_move_failure_exits_one(tmp_path: Path, monkeypatch, cap: Captured):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "5.png").write_text("5")
    (tmp_path / "1.png").mkdir()

    assert run_main([], cap) == 1

    err = cap.err.getvalue()
    assert "Cannot move file:" in err
    assert f"From : {tmp_path.resolve() / '5.png'}" in err
    assert f"To   : {tmp_path.resolve() / '1.png'}" in err
    assert (tmp_path / "5.png").exists()


@pytest.mark.parametrize("exc", [KeyboardInterrupt, EOFError])
def test_interrupted_prompt_exits_one(tmp_path: Path, monkeypatch, cap: Captured, exc):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "b.png").write_text("b")

    def ask(question: str) -> bool:
        raise exc

    assert main([], app=AppConfig(), logger=cap.logger, ask=ask) == 1

    assert "[ERROR] Interrupted." in cap.err.getvalue()
    assert names(tmp_path) == {"b.png"}


def test_interrupt_is_written_to_log_file(tmp_path: Path, monkeypatch):
    work = tmp_path / "work"
    work.mkdir()
    (work / "b.png").write_text("b")
    monkeypatch.chdir(work)
    log_file = tmp_path / "run.log"
    logger = SimpleLogger(
        log_file,
        console=Console(file=io.StringIO(), width=400),
        err_console=Console(file=io.StringIO(), width=400),
    )

    def ask(question: str) -> bool:
        raise KeyboardInterrupt

    assert main([], app=AppConfig(), logger=logger, ask=ask) == 1

    assert "[ERROR] Interrupted." in log_file.read_text(encoding="utf-8")
