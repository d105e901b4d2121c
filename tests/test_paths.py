"""
test_paths.py - Creation of the IP limit log and its directory
"""

import os
import stat
from concurrent.futures import ThreadPoolExecutor

import pytest

from iplimit import FilesystemError, ensure_file_exists


@pytest.fixture
def no_umask():
    old = os.umask(0)
    yield
    os.umask(old)


def test_creates_missing_directories_and_file(tmp_path, no_umask):
    path = tmp_path / "a" / "b" / "3xipl.log"

    ensure_file_exists(path)

    assert path.is_file()
    assert path.read_text() == ""
    assert stat.S_IMODE(path.stat().st_mode) == 0o644
    assert stat.S_IMODE((tmp_path / "a").stat().st_mode) == 0o755
    assert stat.S_IMODE((tmp_path / "a" / "b").stat().st_mode) == 0o755


def test_existing_content_is_untouched(tmp_path):
    path = tmp_path / "3xipl.log"
    path.write_text("X")

    ensure_file_exists(path)
    ensure_file_exists(str(path))

    assert path.read_text() == "X"


def test_relative_path(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    ensure_file_exists("3xipl.log")
    ensure_file_exists(os.path.join("logs", "3xipl.log"))

    assert (tmp_path / "3xipl.log").is_file()
    assert (tmp_path / "logs" / "3xipl.log").is_file()


def test_parent_is_a_file(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("")

    with pytest.raises(FilesystemError) as exc:
        ensure_file_exists(blocker / "3xipl.log")

    assert exc.value.path == blocker / "3xipl.log"
    assert isinstance(exc.value.__cause__, OSError)


def test_path_is_a_directory(tmp_path):
    with pytest.raises(FilesystemError):
        ensure_file_exists(tmp_path)


@pytest.mark.skipif(hasattr(os, "geteuid") and os.geteuid() == 0,
                    reason="root ignores directory permissions")
def test_permission_denied(tmp_path):
    locked = tmp_path / "locked"
    locked.mkdir(mode=0o555)
    try:
        with pytest.raises(FilesystemError):
            ensure_file_exists(locked / "sub" / "3xipl.log")
    finally:
        locked.chmod(0o755)


def test_filesystem_error_is_an_oserror(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("")

    with pytest.raises(OSError):
        ensure_file_exists(blocker / "x" / "3xipl.log")


def test_invalid_path_is_a_filesystem_error(tmp_path):
    path = tmp_path / "bad\x00name.log"

    with pytest.raises(FilesystemError) as exc:
        ensure_file_exists(path)

    assert exc.value.errno is None
    assert isinstance(exc.value.__cause__, ValueError)


def test_concurrent_callers_all_succeed(tmp_path):
    path = tmp_path / "x" / "y" / "z" / "3xipl.log"

    with ThreadPoolExecutor(max_workers=8) as pool:
        futures = [pool.submit(ensure_file_exists, path) for _ in range(32)]
        for f in futures:
            f.result()

    assert path.is_file()
    assert path.read_text() == ""

    path.write_text("X")
    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(ensure_file_exists, [path] * 16))
    assert path.read_text() == "X"
