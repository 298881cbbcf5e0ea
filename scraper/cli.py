"""repo-scraper 命令行接口"""

from __future__ import annotations

import os
from typing import Any

import click

from scraper import __version__
from scraper.core.config import init_config
from scraper.core.exceptions import ScraperError
from scraper.services.scraper import SCRAPERS, Scraper
from scraper.utils.logger import setup_logging
from scraper.utils.yaml_io import load_yaml


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", "config_path", default="", help="配置文件路径（YAML）")
def main(config_path: str) -> None:
    """repo-scraper - 远程代码仓统一抓取工具"""
    setup_logging(
        level=os.getenv("REPOSCRAPER_LOG_LEVEL", "WARNING"),
        json_output=os.getenv("REPOSCRAPER_LOG_JSON", "") == "1",
    )
    if config_path:
        try:
            init_config(config_path)
        except (ScraperError, ValueError, OSError) as e:
            raise click.ClickException(f"配置加载失败: {e}") from e


@main.command(name="types")
def list_types() -> None:
    """列出支持的代码仓类型"""
    for repo_type, backend in SCRAPERS.items():
        click.echo(f"  {repo_type.value:10s} {backend.__name__}")


def _load_descriptors(path: str) -> list[dict[str, Any]]:
    data = load_yaml(path)
    repos = data.get("repos")
    if not isinstance(repos, list) or not all(isinstance(r, dict) for r in repos):
        raise click.ClickException(f"{path} 必须包含 repos 列表")
    return repos


def _echo_progress(message: str, advance: bool) -> None:
    click.echo(f"  {'>>' if advance else '..'} {message}")


@main.command()
@click.argument("scrape_dir", required=False, default="")
@click.option("--type", "repo_type", default="", help="代码仓类型（git/svn/download）")
@click.option("--url", default="", help="代码仓地址")
@click.option("--tag", default="", help="分支/标签/修订号")
@click.option("--username", default="", help="用户名")
@click.option("--password", default="", envvar="REPOSCRAPER_PASSWORD", help="密码")
@click.option("--file", "-f", "desc_file", default="", help="批量描述文件（YAML，repos 列表）")
@click.option("--quiet", "-q", is_flag=True, help="不输出进度")
def scrape(
    scrape_dir: str, repo_type: str, url: str, tag: str,
    username: str, password: str, desc_file: str, quiet: bool,
) -> None:
    """抓取代码仓到 SCRAPE_DIR（首次完整获取，之后增量更新）"""
    if desc_file:
        descriptors = _load_descriptors(desc_file)
    elif repo_type:
        descriptors = [{
            "repo_type": repo_type, "url": url, "tag": tag,
            "first_credential": username, "second_credential": password,
        }]
    else:
        raise click.UsageError("需要 --type 或 --file")

    scraper = Scraper(scrape_dir)
    failed = 0
    for desc in descriptors:
        try:
            ok = scraper.scrape(desc, None if quiet else _echo_progress)
        except ScraperError as e:
            raise click.ClickException(str(e)) from e
        if ok:
            click.echo(f"成功: {scraper.repo_dir}")
        else:
            failed += 1
            click.echo(f"失败: {scraper.repo_dir or '-'}", err=True)
            for err in scraper.errors:
                click.echo(f"  {err}", err=True)
    if failed:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
