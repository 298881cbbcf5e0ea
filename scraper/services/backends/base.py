"""抓取后端基类

职责：
- 为每个代码仓计算 scrape_dir 下的独立子目录
- 判断完整获取 / 增量更新
- 收集错误、驱动进度回调（恰好一次 advance=True）
"""

from __future__ import annotations

import logging
from pathlib import Path

from scraper.core.exceptions import ScraperError
from scraper.core.models import Repository
from scraper.core.protocols import ProgressCallback

logger = logging.getLogger(__name__)


class BaseBackend:
    """后端模板：子类实现 _has_working_copy / _fetch / _update"""

    def __init__(self, scrape_dir: str) -> None:
        self.scrape_dir = Path(scrape_dir)
        self.repo_dir: str | None = None
        self.full_fetches = 0
        self.incremental_updates = 0
        self._errors: list[str] = []
        self._callback: ProgressCallback | None = None

    @property
    def errors(self) -> list[str]:
        return list(self._errors)

    @property
    def succeeded(self) -> bool:
        return not self._errors

    def workdir_for(self, repo: Repository) -> Path:
        """代码仓在 scrape_dir 下的工作目录：<scrape_dir>/<类型>/<摘要>"""
        return self.scrape_dir / repo.repo_type / repo.checkout_key

    def scrape(self, repo: Repository, callback: ProgressCallback | None = None) -> None:
        """完整获取或增量更新 repo；失败只记录错误，不抛异常"""
        self._errors = []
        self._callback = callback
        workdir = self.workdir_for(repo)
        self.repo_dir = str(workdir)
        try:
            workdir.parent.mkdir(parents=True, exist_ok=True)
            if self._has_working_copy(workdir):
                self._report(f"更新 {repo.label}")
                self._update(repo, workdir)
                self.incremental_updates += 1
            else:
                self._report(f"获取 {repo.label}")
                self._fetch(repo, workdir)
                self.full_fetches += 1
            logger.info("抓取就绪: %s -> %s", repo.label, workdir)
        except (ScraperError, OSError) as e:
            self._errors.append(str(e) or type(e).__name__)
            logger.error("抓取失败 %s: %s", repo.label, e)
        finally:
            status = "完成" if self.succeeded else "失败"
            self._report(f"{repo.label} {status}", advance=True)
            self._callback = None

    def _report(self, message: str, advance: bool = False) -> None:
        if self._callback is not None:
            self._callback(message, advance)

    def _has_working_copy(self, workdir: Path) -> bool:
        raise NotImplementedError

    def _fetch(self, repo: Repository, workdir: Path) -> None:
        raise NotImplementedError

    def _update(self, repo: Repository, workdir: Path) -> None:
        raise NotImplementedError
