"""抓取入口 — 按代码仓类型分派到后端，并复用后端实例

同一 Scraper 内每种类型最多一个后端实例，后端借此在后续调用中做增量更新
（git fetch 而非重新 clone）。

单线程同步模型：scrape 完成全部 I/O 后才返回，进度回调在调用线程内同步触发。
同一实例不支持并发调用，需要时由调用方串行化。
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from scraper.core.exceptions import ConfigError
from scraper.core.models import Repository, RepoType, ScrapeOutcome
from scraper.core.protocols import ProgressCallback, ScraperBackend
from scraper.services.backends import DownloadBackend, GitBackend, SvnBackend

logger = logging.getLogger(__name__)

# 代码仓类型 -> 后端类
SCRAPERS: dict[RepoType, type[ScraperBackend]] = {
    RepoType.GIT: GitBackend,
    RepoType.SVN: SvnBackend,
    RepoType.DOWNLOAD: DownloadBackend,
}


class Scraper:
    """代码仓抓取入口

    用法:
        s = Scraper("/tmp/scrape")
        if s.scrape({"repo_type": "git", "url": "...", "tag": "v1"}):
            print(s.repo_dir)
        else:
            print(s.errors)

    最近一次结果只有一个槽位：不同类型交替抓取时，errors / succeeded
    只反映最后一次调用。
    """

    def __init__(self, scrape_dir: str | Path = "") -> None:
        if not scrape_dir:
            from scraper.core.config import get_config
            scrape_dir = get_config().scrape_dir
        self.scrape_dir = str(scrape_dir)
        self._scrapers: dict[RepoType, ScraperBackend] = {}
        self._outcome: ScrapeOutcome | None = None

    def scrape(
        self,
        repo: Repository | Mapping[Any, Any],
        callback: ProgressCallback | None = None,
    ) -> bool:
        """抓取代码仓：首次完整获取，之后增量更新

        Returns:
            是否成功；失败时查看 errors

        Raises:
            ValidationError: 描述缺少 repo_type
            ConfigError: 代码仓类型未知（不会创建任何后端）
        """
        if isinstance(repo, Mapping):
            repo = Repository.from_dict(repo)
        repo_type = self._resolve_type(repo.repo_type)

        backend = self._scrapers.get(repo_type)
        if backend is None:
            backend = SCRAPERS[repo_type](self.scrape_dir)
            self._scrapers[repo_type] = backend
            logger.debug("创建 %s 后端: %s", repo_type.value, type(backend).__name__)

        backend.scrape(repo, callback)

        errors = list(backend.errors)
        if not backend.succeeded and not errors:
            errors = [f"{repo_type.value} 后端报告失败但未给出原因"]
        self._outcome = ScrapeOutcome(
            succeeded=not errors, errors=errors, repo_dir=backend.repo_dir,
        )
        return self._outcome.succeeded

    @staticmethod
    def _resolve_type(value: str) -> RepoType:
        try:
            repo_type = RepoType(value)
        except ValueError:
            raise ConfigError(f"Invalid repository type: {value!r}") from None
        if repo_type not in SCRAPERS:
            raise ConfigError(f"Invalid repository type: {value!r}")
        return repo_type

    @property
    def repo_dir(self) -> str | None:
        """最近一次抓取的本地路径，从未抓取时为 None"""
        return self._outcome.repo_dir if self._outcome else None

    result_path = repo_dir

    @property
    def errors(self) -> list[str]:
        """最近一次抓取的错误信息，未抓取或成功时为空列表"""
        return list(self._outcome.errors) if self._outcome else []

    @property
    def succeeded(self) -> bool:
        """最近一次抓取是否成功，从未抓取时为 False"""
        return self._outcome is not None and self._outcome.succeeded
