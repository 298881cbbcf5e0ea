"""Git 后端 — clone / fetch + 检出指定 ref"""

from __future__ import annotations

import base64
import logging
import re
import shutil
from pathlib import Path
from urllib.parse import urlsplit

from scraper.core.config import get_config
from scraper.core.exceptions import ValidationError
from scraper.core.models import Repository
from scraper.services.backends.base import BaseBackend
from scraper.utils.shell import CommandResult, get_executor, run_cmd

logger = logging.getLogger(__name__)

# 不允许以 "-" 开头，避免 ref 被 git 当作选项解析
_SAFE_REF_RE = re.compile(r"^[a-zA-Z0-9_./@][a-zA-Z0-9_./@\-]*$")


class GitBackend(BaseBackend):
    """Git 仓库后端

    远端地址原样写入 .git/config；用户名/密码只通过单条命令的
    http.extraHeader 传递，不落盘。
    """

    def __init__(self, scrape_dir: str) -> None:
        super().__init__(scrape_dir)
        self.commit_sha = ""

    def _has_working_copy(self, workdir: Path) -> bool:
        return (workdir / ".git").exists()

    def _fetch(self, repo: Repository, workdir: Path) -> None:
        self._check(repo)
        if workdir.exists():
            # 残留的非 git 目录，git clone 不接受非空目标
            shutil.rmtree(workdir)
        auth, secrets = self._auth_options(repo)
        self._git(
            [*auth, "clone", repo.url, str(workdir)],
            cwd=str(workdir.parent), label="git clone", secrets=secrets,
        )
        self._report(f"已克隆 {repo.label}")
        self._checkout(repo, workdir)

    def _update(self, repo: Repository, workdir: Path) -> None:
        self._check(repo)
        auth, secrets = self._auth_options(repo)
        self._git(
            ["remote", "set-url", "origin", repo.url],
            cwd=str(workdir), label="git remote",
        )
        self._git(
            [*auth, "fetch", "--tags", "--prune", "origin"],
            cwd=str(workdir), label="git fetch", secrets=secrets,
        )
        self._report(f"已拉取 {repo.label}")
        self._checkout(repo, workdir)

    def _checkout(self, repo: Repository, workdir: Path) -> None:
        target = self._resolve_ref(repo.tag, workdir)
        self._git(["checkout", "--force", "--detach", target], cwd=str(workdir), label="git checkout")
        r = self._git(["rev-parse", "HEAD"], cwd=str(workdir), label="git rev-parse")
        self.commit_sha = r.stdout.strip()[:12]
        logger.info("Git 检出 %s@%s -> %s", repo.label, self.commit_sha, workdir)

    def _resolve_ref(self, tag: str, workdir: Path) -> str:
        """远端分支优先，其次标签 / 提交，未指定时跟随远端默认分支"""
        if not tag:
            return "origin/HEAD"
        probe = get_executor().execute(
            [get_config().git_bin, "rev-parse", "--verify", "--quiet", f"refs/remotes/origin/{tag}"],
            cwd=str(workdir),
        )
        return f"origin/{tag}" if probe.success else tag

    @staticmethod
    def _check(repo: Repository) -> None:
        if not repo.url:
            raise ValidationError("git 类型必须指定 url")
        try:
            parts = urlsplit(repo.url)
        except ValueError as e:
            raise ValidationError(f"url 无法解析: {repo.url}: {e}") from e
        if parts.password:
            raise ValidationError("url 中不允许包含密码，请使用 password 字段")
        if repo.tag and not _SAFE_REF_RE.match(repo.tag):
            raise ValidationError(f"ref 包含非法字符: {repo.tag}")

    @staticmethod
    def _auth_options(repo: Repository) -> tuple[list[str], tuple[str, ...]]:
        """http(s) 地址的单次认证选项，及日志中需要遮盖的值"""
        if not repo.first_credential or urlsplit(repo.url).scheme not in ("http", "https"):
            return [], ()
        token = base64.b64encode(
            f"{repo.first_credential}:{repo.second_credential}".encode()
        ).decode("ascii")
        return ["-c", f"http.extraHeader=Authorization: Basic {token}"], (token,)

    @staticmethod
    def _git(args: list[str], *, cwd: str, label: str, secrets: tuple[str, ...] = ()) -> CommandResult:
        cfg = get_config()
        return run_cmd(
            [cfg.git_bin, *args], cwd=cwd, label=label,
            timeout=cfg.command_timeout, secrets=secrets,
        )
