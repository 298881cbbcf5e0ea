"""统一异常体系

所有业务异常继承 ScraperError。
ConfigError / ValidationError 由 Scraper.scrape 直接抛给调用方；
ExecutionError / FetchError 只在后端内部使用，被收集为错误信息而不外抛。
"""

from __future__ import annotations


class ScraperError(Exception):
    """抓取库基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(ScraperError):
    """配置无效：未知的代码仓类型、配置文件内容错误"""

    code = "CONFIG_ERROR"


class ValidationError(ScraperError):
    """输入数据校验失败"""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, details: list[str] | None = None) -> None:
        super().__init__(message)
        self.details = details or []


class ExecutionError(ScraperError):
    """外部命令（git / svn）执行失败"""

    code = "EXECUTION_ERROR"


class FetchError(ScraperError):
    """下载或解压失败"""

    code = "FETCH_ERROR"
