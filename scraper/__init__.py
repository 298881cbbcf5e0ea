"""repo-scraper — 远程代码仓（git / svn / 下载包）统一抓取入口"""

__version__ = "1.0.0"

from scraper.services.scraper import SCRAPERS, Scraper  # noqa: E402

__all__ = ["SCRAPERS", "Scraper", "__version__"]
