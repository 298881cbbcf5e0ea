"""SvnBackend 测试"""

from __future__ import annotations

from pathlib import Path

from scraper.core.models import Repository
from scraper.services.backends.svn import SvnBackend

REPO = Repository(
    repo_type="svn", url="https://svn.example/trunk", tag="1024",
    first_credential="alice", second_credential="pw1",
)


def test_checkout_then_update(tmp_path: Path, fake_executor, progress) -> None:
    backend = SvnBackend(str(tmp_path))
    backend.scrape(REPO, progress)
    assert backend.succeeded
    workdir = Path(backend.repo_dir or "")
    assert (workdir / ".svn").is_dir()

    checkout_args = fake_executor.calls[0][0]
    assert checkout_args[:4] == ["svn", "checkout", REPO.url, str(workdir)]
    assert checkout_args[4:] == [
        "--non-interactive", "--no-auth-cache", "-r", "1024", "--username", "alice", "--password", "pw1",
    ]

    backend.scrape(REPO)
    update_args, cwd = fake_executor.calls[1]
    assert update_args[1] == "update"
    assert cwd == str(workdir)
    assert backend.full_fetches == 1
    assert backend.incremental_updates == 1
    assert [adv for _, adv in progress.calls].count(True) == 1


def test_update_failure(tmp_path: Path, fake_executor) -> None:
    backend = SvnBackend(str(tmp_path))
    backend.scrape(REPO)
    fake_executor.fail_on = "update"
    backend.scrape(REPO)
    assert not backend.succeeded
    assert "svn update失败" in backend.errors[0]
    assert backend.repo_dir is not None


def test_missing_url(tmp_path: Path, fake_executor) -> None:
    backend = SvnBackend(str(tmp_path))
    backend.scrape(Repository(repo_type="svn"))
    assert backend.errors == ["svn 类型必须指定 url"]


def test_missing_binary(tmp_path: Path, _isolated_config) -> None:
    _isolated_config.svn_bin = str(tmp_path / "no-such-svn")
    backend = SvnBackend(str(tmp_path / "dest"))
    backend.scrape(REPO)
    assert not backend.succeeded
    assert len(backend.errors) == 1
