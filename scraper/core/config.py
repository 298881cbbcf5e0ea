"""集中配置管理

提供统一的配置入口：默认抓取目录、外部命令路径、下载超时与大小上限。
支持从 YAML 文件加载 + 编程式覆盖。
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field

from scraper.core.exceptions import ConfigError
from scraper.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """全局配置"""

    # 目录
    scrape_dir: str = "data/scrape"

    # 外部命令
    git_bin: str = "git"
    svn_bin: str = "svn"
    command_timeout: int = 1800  # 秒

    # 下载
    download_timeout: int = 60
    max_download_bytes: int = 512 * 1024 * 1024

    # 自定义扩展 (放不到字段里的配置项)
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_file(cls, path: str = "configs/scraper.yml") -> Config:
        """从 YAML 文件加载配置，不存在则返回默认"""
        data = load_yaml(path)
        if not data:
            return cls()
        known = {f.name for f in cls.__dataclass_fields__.values()} - {"extra"}
        matched = {k: v for k, v in data.items() if k in known}
        extra = {k: v for k, v in data.items() if k not in known}
        try:
            cfg = cls(**matched)
        except TypeError as e:
            raise ConfigError(f"配置文件内容无效: {path}: {e}") from e
        for name in ("command_timeout", "download_timeout", "max_download_bytes"):
            if not isinstance(getattr(cfg, name), int) or getattr(cfg, name) <= 0:
                raise ConfigError(f"配置项 {name} 必须为正整数: {getattr(cfg, name)!r}")
        cfg.extra = extra
        return cfg

    def to_dict(self) -> dict:
        return asdict(self)


# 全局单例，首次 import 时不加载文件；由 CLI 入口显式初始化
_current: Config | None = None


def get_config() -> Config:
    """获取当前配置（未初始化则返回默认值）"""
    global _current  # noqa: PLW0603
    if _current is None:
        _current = Config()
    return _current


def init_config(path: str = "configs/scraper.yml") -> Config:
    """从文件初始化全局配置"""
    global _current  # noqa: PLW0603
    _current = Config.from_file(path)
    logger.info("配置已加载: %s", path)
    return _current
