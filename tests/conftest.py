"""共享 fixture — 独立配置 + 可编程的命令执行器替身"""

from __future__ import annotations

from pathlib import Path

import pytest

import scraper.core.config as cfgmod
from scraper.utils import shell
from scraper.utils.shell import CommandResult


class FakeExecutor:
    """记录命令并模拟 git / svn 的落盘效果

    fail_on: 命令中包含该子串时返回失败
    remote_branches: rev-parse --verify 能解析到的远端分支
    """

    def __init__(self) -> None:
        self.calls: list[tuple[list[str], str]] = []
        self.fail_on: str = ""
        self.remote_branches: set[str] = set()
        self.head = "abc123def4567890"

    def execute(self, cmd, *, cwd=".", env=None, timeout=None) -> CommandResult:  # type: ignore[no-untyped-def]
        args = list(cmd)
        self.calls.append((args, cwd))
        line = " ".join(args)
        if self.fail_on and self.fail_on in line:
            return CommandResult(128, "", f"fatal: {self.fail_on} failed")
        args = self.strip_config_options(args)
        sub = args[1]
        if args[0] == "git" and sub == "clone":
            dest = Path(args[-1])
            (dest / ".git").mkdir(parents=True)
            (dest / "README").write_text("hello")
            (dest / ".git" / "config").write_text(f"[remote \"origin\"]\n\turl = {args[2]}\n")
        elif args[0] == "git" and sub == "checkout":
            (Path(cwd) / "REVISION").write_text(args[-1])
        elif args[0] == "git" and sub == "rev-parse":
            if "--verify" in args:
                branch = args[-1].removeprefix("refs/remotes/origin/")
                return CommandResult(0 if branch in self.remote_branches else 1, "", "")
            return CommandResult(0, self.head + "\n", "")
        elif args[0] == "svn" and sub == "checkout":
            dest = Path(args[3])
            (dest / ".svn").mkdir(parents=True)
            (dest / "trunk.txt").write_text("svn")
        return CommandResult(0, "", "")

    @staticmethod
    def strip_config_options(args: list[str]) -> list[str]:
        """去掉 git 子命令前的 -c key=value 选项"""
        rest = args[1:]
        while len(rest) >= 2 and rest[0] == "-c":
            rest = rest[2:]
        return [args[0], *rest]

    def commands(self) -> list[str]:
        return [" ".join(self.strip_config_options(args)[1:3]) for args, _ in self.calls]


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """每个测试使用独立配置，默认抓取目录指向临时目录"""
    cfg = cfgmod.Config(scrape_dir=str(tmp_path / "default_scrape"))
    monkeypatch.setattr(cfgmod, "_current", cfg)
    yield cfg


@pytest.fixture()
def fake_executor(monkeypatch: pytest.MonkeyPatch) -> FakeExecutor:
    ex = FakeExecutor()
    monkeypatch.setattr(shell, "_default_executor", ex)
    return ex


@pytest.fixture()
def progress():
    """进度回调记录器"""
    calls: list[tuple[str, bool]] = []

    def callback(message: str, advance: bool) -> None:
        calls.append((message, advance))

    callback.calls = calls  # type: ignore[attr-defined]
    return callback
