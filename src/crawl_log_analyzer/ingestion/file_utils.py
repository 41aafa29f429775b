"""
Shared file utilities for feeding log files into an analysis.

Opens plain and gzip-compressed access logs and concatenates them into the
single text blob the analysis engine expects.
"""

import gzip
import logging
from pathlib import Path
from typing import IO, Iterable, Union

from .exceptions import NoLogFilesError, TooManyFilesError

logger = logging.getLogger(__name__)

# Upper bound on files per analysis
DEFAULT_MAX_FILES = 50

# Suffixes picked up when a directory is given
LOG_FILE_SUFFIXES = (".log", ".txt", ".gz", ".access", ".1")


def open_file_auto_decompress(
    file_path: Union[str, Path],
    encoding: str = "utf-8",
    errors: str = "replace",
) -> IO[str]:
    """
    Open a file, automatically detecting gzip compression.

    Gzip detection is performed by:
    1. Checking for .gz file extension
    2. Checking for gzip magic bytes (0x1f 0x8b) even without .gz extension

    Undecodable bytes are replaced rather than raising, since access logs
    routinely carry binary garbage from scanners.

    Args:
        file_path: Path to the file
        encoding: Text encoding (default: utf-8)
        errors: Decoding error handler (default: replace)

    Returns:
        Open file handle (text mode)

    Raises:
        FileNotFoundError: If file doesn't exist
        PermissionError: If file cannot be read
        gzip.BadGzipFile: If file has .gz extension but is not valid gzip
    """
    path = Path(file_path)

    if not path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    if path.suffix.lower() == ".gz":
        return gzip.open(path, "rt", encoding=encoding, errors=errors)

    with open(path, "rb") as f:
        magic = f.read(2)
    if magic == b"\x1f\x8b":
        return gzip.open(path, "rt", encoding=encoding, errors=errors)

    return open(path, "r", encoding=encoding, errors=errors)


def collect_log_files(paths: Iterable[Union[str, Path]]) -> list[Path]:
    """
    Expand files and directories into a sorted list of log files.

    Directories contribute their direct children with a known log suffix.

    Raises:
        FileNotFoundError: If a path doesn't exist
    """
    files: list[Path] = []
    for raw in paths:
        path = Path(raw)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {raw}")
        if path.is_dir():
            files.extend(
                sorted(
                    child
                    for child in path.iterdir()
                    if child.is_file() and child.suffix.lower() in LOG_FILE_SUFFIXES
                )
            )
        else:
            files.append(path)
    return files


def read_log_files(
    paths: Iterable[Union[str, Path]],
    max_files: int = DEFAULT_MAX_FILES,
) -> str:
    """
    Read one or more plain or gzip log files into a single text blob.

    Args:
        paths: Files and/or directories
        max_files: Maximum number of files accepted

    Returns:
        Concatenated file contents, one file after another

    Raises:
        NoLogFilesError: If no files were found
        TooManyFilesError: If more than max_files files were found
        FileNotFoundError: If a path doesn't exist
    """
    path_list = [str(p) for p in paths]
    files = collect_log_files(path_list)

    if not files:
        raise NoLogFilesError(path_list)
    if len(files) > max_files:
        raise TooManyFilesError(len(files), max_files)

    chunks = []
    for file_path in files:
        with open_file_auto_decompress(file_path) as f:
            content = f.read()
        logger.debug(f"Read {len(content):,} characters from {file_path}")
        if content and not content.endswith("\n"):
            content += "\n"
        chunks.append(content)

    logger.info(f"Read {len(files)} log file(s)")
    return "".join(chunks)
