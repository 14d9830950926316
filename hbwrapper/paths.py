"""
hbwrapper.paths
~~~~~~~~~~~~~~~
Single source of truth for filesystem paths used by the wrapper.
Import these instead of hard-coding strings anywhere else.
"""

from __future__ import annotations

from pathlib import Path

from hbwrapper.enums import Format

# Relative to the working directory, next to wherever the wrapper is run from
DEFAULT_HANDBRAKE_BIN = Path("./HandBrakeCLI")


def validate_binary(binary: Path) -> list[str]:
    """
    Return a list of error strings if *binary* is missing or not executable.
    Empty list means all good.
    """
    errors: list[str] = []
    if not binary.exists():
        errors.append(f"Binary not found: {binary}")
    elif not binary.is_file():
        errors.append(f"Not a file: {binary}")
    elif not binary.stat().st_mode & 0o111:
        errors.append(f"Not executable: {binary}")
    return errors


def resolve_output_path(
    input_file: Path,
    output_directory: Path,
    container: Format,
    output_filename: str | None = None,
) -> Path:
    """
    Work out where HandBrakeCLI should write, always ending in the
    container's extension.

    Examples (container = Format.AV_MP4):
        input_file="movie.mkv", output_filename=None        → <dir>/movie.mp4
        input_file="movie.mkv", output_filename="clip"      → <dir>/clip.mp4
        input_file="movie.mkv", output_filename="clip.mp4"  → <dir>/clip.mp4
        input_file="movie.mkv", output_filename="clip.mkv"  → <dir>/clip.mkv.mp4
    """
    extension = container.extension
    if not output_filename:
        name = input_file.stem + extension
    elif output_filename.endswith(extension):
        name = output_filename
    else:
        name = output_filename + extension

    return output_directory.resolve() / name
