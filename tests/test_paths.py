from pathlib import Path

import pytest

from hbwrapper.enums import Format
from hbwrapper.paths import resolve_output_path, validate_binary


class TestResolveOutputPath:

    @pytest.mark.parametrize("output_filename, expected", [
        (None,       "movie.mp4"),
        ("",         "movie.mp4"),
        ("clip",     "clip.mp4"),
        ("clip.mp4", "clip.mp4"),
        ("clip.mkv", "clip.mkv.mp4"),
    ])
    def test_naming(self, tmp_path, output_filename, expected):
        result = resolve_output_path(
            Path("/videos/movie.mkv"), tmp_path, Format.AV_MP4, output_filename
        )
        assert result == tmp_path.resolve() / expected

    def test_container_decides_extension(self, tmp_path):
        result = resolve_output_path(Path("movie.mp4"), tmp_path, Format.AV_MKV)
        assert result.name == "movie.mkv"

    def test_relative_directory_is_made_absolute(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = resolve_output_path(Path("movie.mkv"), Path("out"), Format.AV_MP4)
        assert result == tmp_path.resolve() / "out" / "movie.mp4"


class TestValidateBinary:

    def test_missing(self, tmp_path):
        errors = validate_binary(tmp_path / "HandBrakeCLI")
        assert errors and "not found" in errors[0]

    def test_directory(self, tmp_path):
        assert "Not a file" in validate_binary(tmp_path)[0]

    def test_not_executable(self, tmp_path):
        binary = tmp_path / "HandBrakeCLI"
        binary.write_text("")
        binary.chmod(0o644)
        assert "Not executable" in validate_binary(binary)[0]

    def test_ok(self, tmp_path):
        binary = tmp_path / "HandBrakeCLI"
        binary.write_text("")
        binary.chmod(0o755)
        assert validate_binary(binary) == []
