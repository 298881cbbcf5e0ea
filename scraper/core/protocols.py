"""后端协议定义

Scraper 只依赖 ScraperBackend 协议，不依赖具体后端实现。
使用 typing.Protocol 而非 ABC，测试替身无需继承即可满足协议。
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from scraper.core.models import Repository

# 进度回调: (说明文字, 是否推进进度)。单次抓取中恰有一次 advance=True
ProgressCallback = Callable[[str, bool], None]


class ScraperBackend(Protocol):
    """抓取后端协议

    构造参数为抓取目录；首次 scrape 完整获取，之后增量更新。
    """

    repo_dir: str | None

    def __init__(self, scrape_dir: str) -> None: ...

    def scrape(self, repo: Repository, callback: ProgressCallback | None = None) -> None:
        """获取或更新 repo 到 scrape_dir 下的独立子目录"""
        ...

    @property
    def succeeded(self) -> bool:
        """最近一次 scrape 是否成功"""
        ...

    @property
    def errors(self) -> list[str]:
        """最近一次 scrape 的错误信息（无错误时为空列表）"""
        ...
