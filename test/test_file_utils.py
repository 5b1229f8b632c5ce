"""Tests for FileUtils."""

from pathlib import Path

from upload_folder.utils.file_utils import FileUtils


def test_list_files_skips_directories(photo_folder):
    files = FileUtils.list_files(photo_folder)

    assert [f.name for f in files] == ["a.jpg", "b.png", "c.gif"]


def test_list_files_missing_directory(tmp_path):
    assert FileUtils.list_files(tmp_path / "missing") == []


def test_content_type_known_extension():
    assert FileUtils.get_content_type(Path("photo.png")) == "image/png"
    assert FileUtils.get_content_type(Path("photo.JPG")) == "image/jpeg"


def test_content_type_unknown_extension():
    assert FileUtils.get_content_type(Path("photo.unknownext")) == "application/octet-stream"
    assert FileUtils.get_content_type(Path("README")) == "application/octet-stream"


def test_remote_key(photo_folder):
    key = FileUtils.build_remote_key(photo_folder, photo_folder / "a.jpg")

    assert key == "trip/a.jpg"


def test_remote_key_with_extension(photo_folder):
    assert FileUtils.build_remote_key(photo_folder, photo_folder / "a.jpg", ".webp") == "trip/a.webp"
    assert FileUtils.build_remote_key(photo_folder, photo_folder / "raw", ".webp") == "trip/raw.webp"


def test_remote_key_trailing_slash(photo_folder):
    folder = Path(str(photo_folder) + "/")

    assert FileUtils.build_remote_key(folder, photo_folder / "b.png") == "trip/b.png"


def test_remote_key_relative_current_directory(photo_folder, monkeypatch):
    monkeypatch.chdir(photo_folder)

    assert FileUtils.build_remote_key(Path("."), Path("a.jpg")) == "trip/a.jpg"


def test_list_files_skips_symlinks(photo_folder):
    (photo_folder / "link.jpg").symlink_to(photo_folder / "a.jpg")

    files = FileUtils.list_files(photo_folder)

    assert [f.name for f in files] == ["a.jpg", "b.png", "c.gif"]


def test_remote_key_keeps_symlinked_folder_name(tmp_path):
    target = tmp_path / "a1b2c3"
    target.mkdir()
    (target / "x.jpg").write_bytes(b"x")
    album = tmp_path / "album"
    album.symlink_to(target, target_is_directory=True)

    assert FileUtils.build_remote_key(album, album / "x.jpg") == "album/x.jpg"
