"""抓取后端

- base.py: 模板基类（工作目录、增量判断、错误收集、进度回调）
- git.py / svn.py: 版本控制后端
- download.py: 纯下载后端
"""

from scraper.services.backends.base import BaseBackend
from scraper.services.backends.download import DownloadBackend
from scraper.services.backends.git import GitBackend
from scraper.services.backends.svn import SvnBackend

__all__ = ["BaseBackend", "DownloadBackend", "GitBackend", "SvnBackend"]
