import os
import time

import pytest

from app.core.exceptions import BadRequestError


def age(path, seconds):
    past = time.time() - seconds
    os.utime(path, (past, past))


def test_resolve_relative_path(storage):
    assert storage.resolve("videos/a.mp4") == storage.media_root / "videos" / "a.mp4"


@pytest.mark.parametrize("path", ["../escape.mp4", "/etc/passwd", "videos/../../escape.mp4"])
def test_resolve_rejects_paths_outside_root(storage, path):
    with pytest.raises(BadRequestError):
        storage.resolve(path)


def test_remove_missing_file(storage):
    assert storage.remove(str(storage.media_root / "nothing.mp4")) is False
    assert storage.remove("") is False


def test_remove_many_reports_failures(storage, media_file):
    ok = media_file("ok.mp4")
    # A directory can't be removed with os.remove
    stuck = storage.media_root / "stuck"
    stuck.mkdir()

    failed = storage.remove_many([ok, str(stuck), str(storage.media_root / "missing.png")])

    assert failed == [str(stuck)]
    assert not os.path.exists(ok)


def test_sweep_orphans(storage, media_file):
    kept = media_file("kept.mp4")
    orphan = media_file("nested/orphan.png")
    fresh = media_file("fresh.png")
    age(kept, 7200)
    age(orphan, 7200)

    removed, failed = storage.sweep_orphans({kept}, grace_seconds=3600)

    assert removed == [str(storage.media_root / "nested" / "orphan.png")]
    assert failed == []
    assert os.path.exists(kept)
    assert os.path.exists(fresh)
    assert not os.path.exists(orphan)


def test_sweep_keeps_relative_references(storage, media_file):
    avatar = media_file("avatars/me.png")
    age(avatar, 7200)

    removed, failed = storage.sweep_orphans({"avatars/me.png"}, grace_seconds=3600)

    assert (removed, failed) == ([], [])
    assert os.path.exists(avatar)


def test_sweep_without_root(tmp_path):
    from app.services.file_storage import FileStorage

    assert FileStorage(str(tmp_path / "absent")).sweep_orphans(set(), 0) == ([], [])
