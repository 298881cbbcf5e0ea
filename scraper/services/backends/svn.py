"""Subversion 后端 — checkout / update"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from scraper.core.config import get_config
from scraper.core.exceptions import ValidationError
from scraper.core.models import Repository
from scraper.services.backends.base import BaseBackend
from scraper.utils.shell import run_cmd

logger = logging.getLogger(__name__)


class SvnBackend(BaseBackend):
    """Subversion 仓库后端"""

    def _has_working_copy(self, workdir: Path) -> bool:
        return (workdir / ".svn").exists()

    def _fetch(self, repo: Repository, workdir: Path) -> None:
        if not repo.url:
            raise ValidationError("svn 类型必须指定 url")
        if workdir.exists():
            shutil.rmtree(workdir)
        self._svn(repo, ["checkout", repo.url, str(workdir)], cwd=str(workdir.parent), label="svn checkout")
        self._report(f"已检出 {repo.label}")

    def _update(self, repo: Repository, workdir: Path) -> None:
        self._svn(repo, ["update"], cwd=str(workdir), label="svn update")
        self._report(f"已更新 {repo.label}")

    @staticmethod
    def _svn(repo: Repository, args: list[str], *, cwd: str, label: str) -> None:
        cfg = get_config()
        cmd = [cfg.svn_bin, *args, "--non-interactive", "--no-auth-cache"]
        if repo.tag:
            cmd += ["-r", repo.tag]
        if repo.first_credential:
            cmd += ["--username", repo.first_credential]
        if repo.second_credential:
            cmd += ["--password", repo.second_credential]
        run_cmd(
            cmd, cwd=cwd, label=label, timeout=cfg.command_timeout,
            secrets=(repo.second_credential,),
        )
