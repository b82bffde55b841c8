import os

import pytest

from reorganizer import utils
from reorganizer.errors import PathError, PathPermissionError
from reorganizer.utils import resolve_path, resolve_roots

from conftest import needs_non_root


def test_resolve_plain_directory(tmp_path):
    rp = resolve_path(str(tmp_path))
    assert rp.path == tmp_path.resolve()
    assert rp.via_symlink is False


def test_resolve_follows_symlink_to_real_target(tmp_path):
    real = tmp_path / "real"
    real.mkdir()
    link = tmp_path / "link"
    link.symlink_to(real)

    rp = resolve_path(str(link))
    assert rp.path == real.resolve()
    assert rp.via_symlink is True


def test_missing_path_raises(tmp_path):
    with pytest.raises(PathError):
        resolve_path(str(tmp_path / "nope"))


def test_file_is_not_a_directory(tmp_path):
    f = tmp_path / "file.txt"
    f.write_text("x")
    with pytest.raises(PathError):
        resolve_path(str(f))


def test_dangling_symlink_raises(tmp_path):
    link = tmp_path / "dangling"
    link.symlink_to(tmp_path / "gone")
    with pytest.raises(PathError):
        resolve_path(str(link))


def test_target_defaults_to_source(tmp_path, logger):
    source, target = resolve_roots(str(tmp_path), None, logger)
    assert source == target


def test_target_resolved_independently(tmp_path, logger):
    src = tmp_path / "src"
    dst = tmp_path / "dst"
    src.mkdir()
    dst.mkdir()
    source, target = resolve_roots(str(src), str(dst), logger)
    assert source.path == src.resolve()
    assert target.path == dst.resolve()


@needs_non_root
def test_unwritable_target_raises(tmp_path, logger):
    dst = tmp_path / "dst"
    dst.mkdir()
    os.chmod(dst, 0o555)
    try:
        with pytest.raises(PathPermissionError):
            resolve_roots(str(tmp_path), str(dst), logger)
    finally:
        os.chmod(dst, 0o755)


def test_permission_error_is_builtin_permission_error():
    assert issubclass(PathPermissionError, PermissionError)


def test_unwritable_target_raises_without_chmod(tmp_path, logger, monkeypatch):
    dst = tmp_path / "dst"
    dst.mkdir()
    monkeypatch.setattr(utils.os, "access", lambda path, mode: not mode & os.W_OK)
    with pytest.raises(PathPermissionError):
        resolve_roots(str(tmp_path), str(dst), logger)


def test_unreadable_source_raises(tmp_path, logger, monkeypatch):
    monkeypatch.setattr(utils.os, "access", lambda path, mode: not mode & os.R_OK)
    with pytest.raises(PathPermissionError):
        resolve_roots(str(tmp_path), None, logger)
