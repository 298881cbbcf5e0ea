"""下载后端 — 通过 http(s) 获取文件，tar 包自动解压

纯下载没有增量协议：更新即重新下载并整体替换本地副本。
"""

from __future__ import annotations

import base64
import http.client
import logging
import shutil
import tarfile
import urllib.error
import urllib.request
from pathlib import Path

from scraper.core.config import get_config
from scraper.core.exceptions import FetchError, ValidationError
from scraper.core.models import Repository
from scraper.services.backends.base import BaseBackend
from scraper.utils.net import filename_from_url, validate_url_scheme

logger = logging.getLogger(__name__)

_TAR_SUFFIXES = (".tar", ".tar.gz", ".tgz", ".tar.bz2", ".tbz2", ".tar.xz", ".txz")
_CHUNK = 64 * 1024


class DownloadBackend(BaseBackend):
    """下载包后端"""

    def _has_working_copy(self, workdir: Path) -> bool:
        return workdir.is_dir()

    def _fetch(self, repo: Repository, workdir: Path) -> None:
        self._download_into(repo, workdir)

    def _update(self, repo: Repository, workdir: Path) -> None:
        self._download_into(repo, workdir)

    def _download_into(self, repo: Repository, workdir: Path) -> None:
        if not repo.url:
            raise ValidationError("download 类型必须指定 url")
        validate_url_scheme(repo.url, context=f"download {repo.label}")

        filename = filename_from_url(repo.url)
        archive = workdir.parent / f"{workdir.name}.part"
        staging = workdir.parent / f"{workdir.name}.new"
        try:
            self._download(repo, archive)
            self._report(f"已下载 {repo.label}")
            if staging.exists():
                shutil.rmtree(staging)
            staging.mkdir()
            if filename.lower().endswith(_TAR_SUFFIXES):
                self._extract(archive, staging)
                self._report(f"已解压 {filename}")
            else:
                shutil.move(str(archive), str(staging / filename))
            # 新副本就绪后才替换旧副本，失败时保留上一次的内容
            if workdir.exists():
                shutil.rmtree(workdir)
            staging.rename(workdir)
        finally:
            archive.unlink(missing_ok=True)
            if staging.exists():
                shutil.rmtree(staging, ignore_errors=True)

    @staticmethod
    def _download(repo: Repository, dest: Path) -> None:
        cfg = get_config()
        req = urllib.request.Request(repo.url)
        if repo.first_credential:
            token = base64.b64encode(
                f"{repo.first_credential}:{repo.second_credential}".encode()
            ).decode("ascii")
            req.add_header("Authorization", f"Basic {token}")

        received = 0
        try:
            with urllib.request.urlopen(req, timeout=cfg.download_timeout) as resp:  # nosec B310
                with open(dest, "wb") as f:
                    while chunk := resp.read(_CHUNK):
                        received += len(chunk)
                        if received > cfg.max_download_bytes:
                            raise FetchError(
                                f"下载内容超过上限 {cfg.max_download_bytes} 字节: {repo.redacted_url}"
                            )
                        f.write(chunk)
        except urllib.error.HTTPError as e:
            raise FetchError(f"下载失败 {repo.redacted_url}: HTTP {e.code} {e.reason}") from e
        except urllib.error.URLError as e:
            raise FetchError(f"下载失败 {repo.redacted_url}: {e.reason}") from e
        except TimeoutError as e:
            raise FetchError(f"下载失败 {repo.redacted_url}: 超时") from e
        except (http.client.HTTPException, ValueError) as e:
            # 非法端口、响应截断、连接被关闭等不经 URLError 包装
            raise FetchError(f"下载失败 {repo.redacted_url}: {type(e).__name__}: {e}") from e
        logger.info("下载完成: %s (%d 字节)", repo.redacted_url, received)

    @staticmethod
    def _extract(archive: Path, workdir: Path) -> None:
        try:
            with tarfile.open(archive) as tf:
                tf.extractall(path=str(workdir), filter="data")  # noqa: S202
        except tarfile.TarError as e:
            raise FetchError(f"解压失败 {archive.name}: {e}") from e
