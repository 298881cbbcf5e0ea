"""核心数据模型

代码仓描述（Repository）、后端类型（RepoType）与单次抓取结果（ScrapeOutcome）。
"""

from __future__ import annotations

import hashlib
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any
from urllib.parse import urlsplit, urlunsplit

from scraper.core.exceptions import ValidationError


class RepoType(str, Enum):
    """已知的代码仓类型（闭合集合，与 SCRAPERS 注册表一一对应）"""

    GIT = "git"
    SVN = "svn"
    DOWNLOAD = "download"


# from_dict 接受的字段别名
_KEY_ALIASES = {
    "type": "repo_type",
    "ref": "tag",
    "revision": "tag",
    "branch": "tag",
    "username": "first_credential",
    "password": "second_credential",
    "name": "display_name",
}


@dataclass(frozen=True)
class Repository:
    """代码仓描述 — 不可变

    repo_type 为原始字符串，是否属于已知类型由 Scraper 在分派前检查。
    tag 对 git 是分支/标签/提交，对 svn 是修订号，对下载来源无意义。
    first_credential / second_credential 为用户名 / 密码。
    """

    repo_type: str
    url: str = ""
    tag: str = ""
    first_credential: str = ""
    second_credential: str = ""
    display_name: str = ""

    def __post_init__(self) -> None:
        if isinstance(self.repo_type, Enum):
            object.__setattr__(self, "repo_type", self.repo_type.value)

    @classmethod
    def from_dict(cls, data: Mapping[Any, Any]) -> Repository:
        """从宽松的键值映射构造描述；未知键忽略，值统一转为字符串"""
        fields_ = {f for f in cls.__dataclass_fields__}
        normalized: dict[str, str] = {}
        for raw_key, value in data.items():
            key = str(raw_key).strip().lstrip(":").lower()
            key = _KEY_ALIASES.get(key, key)
            if key not in fields_ or value is None:
                continue
            if isinstance(value, Enum):
                value = value.value
            normalized[key] = str(value).strip()
        if not normalized.get("repo_type"):
            raise ValidationError("代码仓描述缺少 repo_type", details=sorted(map(str, data)))
        return cls(**normalized)

    def to_dict(self) -> dict[str, str]:
        return asdict(self)

    @property
    def redacted_url(self) -> str:
        """隐藏 URL 中用户信息后的地址，用于日志输出"""
        try:
            parts = urlsplit(self.url)
        except ValueError:
            # 无法解析的地址原样返回，由后端记录为校验错误
            return self.url
        if "@" not in parts.netloc:
            return self.url
        host = parts.netloc.rsplit("@", 1)[1]
        return urlunsplit(parts._replace(netloc=f"***@{host}"))

    @property
    def checkout_key(self) -> str:
        """(repo_type, url) 的稳定摘要，后端据此选取独立子目录"""
        digest = hashlib.sha1(f"{self.repo_type}\0{self.url}".encode(), usedforsecurity=False)
        return digest.hexdigest()[:16]

    @property
    def label(self) -> str:
        return self.display_name or self.redacted_url or self.repo_type


@dataclass
class ScrapeOutcome:
    """最近一次抓取的结果（每次调用覆盖，不累积）"""

    succeeded: bool
    errors: list[str] = field(default_factory=list)
    repo_dir: str | None = None
