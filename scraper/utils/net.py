"""网络工具 — URL 安全校验"""

from __future__ import annotations

from urllib.parse import urlparse

from scraper.core.exceptions import ValidationError

_ALLOWED_SCHEMES = frozenset(("http", "https"))


def validate_url_scheme(url: str, *, context: str = "") -> None:
    """校验 URL 仅使用 http/https，防止 file:// 等非预期协议访问

    Raises:
        ValidationError: URL scheme 不在白名单内
    """
    try:
        parsed = urlparse(url)
    except ValueError as e:
        raise ValidationError(f"URL 无法解析: {url}: {e}") from e
    if parsed.scheme not in _ALLOWED_SCHEMES:
        label = f" ({context})" if context else ""
        raise ValidationError(
            f"不允许的 URL 协议 '{parsed.scheme}'{label}，"
            f"仅支持 http/https: {url}"
        )


def filename_from_url(url: str, default: str = "download") -> str:
    """取 URL 路径的最后一段作为文件名"""
    name = urlparse(url).path.rstrip("/").split("/")[-1]
    return name or default
