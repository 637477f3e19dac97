"""
File Operations for the Version Synchronization Pipeline

Atomic replacement of output and cache files, and creation of the
directories they live in.
"""

import os
from typing import IO, Any, Callable

from update_versions.constants import DIRECTORY_PERMISSIONS, TEMP_FILE_SUFFIX
from update_versions.exceptions import FileSystemError
from update_versions.log_utils import logger

from .interfaces import Pathish


def _remove_temp_file(temp_path: str) -> None:
    try:
        if os.path.exists(temp_path):
            os.remove(temp_path)
    except OSError as e:
        logger.debug(f"Could not remove temporary file {temp_path}: {e}")


def atomic_write(
    file_path: Pathish,
    writer_func: Callable[[IO[Any]], None],
    binary: bool = False,
) -> None:
    """
    Write a file atomically by writing a sibling `<file_path>.tmp` and renaming it over the target.

    The temporary file is written and closed in full before `os.replace` moves it into
    place, so readers never observe a partially written target. On any failure the
    temporary file is removed (best effort) and the previous target, if any, is left
    untouched.

    Parameters:
        file_path (Pathish): Destination path.
        writer_func (Callable[[IO[Any]], None]): Callable that receives the open temporary
            file and writes the desired content to it.
        binary (bool): Open the temporary file in binary mode instead of UTF-8 text mode.

    Raises:
        FileSystemError: If the temporary file cannot be written or renamed.
        Exception: Any exception raised by `writer_func` is re-raised after cleanup.
    """
    target = os.fspath(file_path)
    temp_path = f"{target}{TEMP_FILE_SUFFIX}"

    try:
        if binary:
            with open(temp_path, "wb") as temp_f:
                writer_func(temp_f)
        else:
            with open(temp_path, "w", encoding="utf-8", newline="\n") as temp_f:
                writer_func(temp_f)
        os.replace(temp_path, target)
    except OSError as e:
        _remove_temp_file(temp_path)
        raise FileSystemError(
            f"failed to write {target}", path=target, details=str(e)
        ) from e
    except Exception:
        _remove_temp_file(temp_path)
        raise


def atomic_write_bytes(file_path: Pathish, data: bytes) -> None:
    """Atomically replace `file_path` with the given bytes."""
    atomic_write(file_path, lambda f: f.write(data), binary=True)


def ensure_directory(dir_path: Pathish) -> None:
    """
    Create a directory and its parents if missing.

    Raises:
        FileSystemError: If the directory cannot be created.
    """
    try:
        os.makedirs(dir_path, mode=DIRECTORY_PERMISSIONS, exist_ok=True)
    except OSError as e:
        raise FileSystemError(
            f"failed to create directory {dir_path}",
            path=os.fspath(dir_path),
            details=str(e),
        ) from e


def ensure_output_directory(output_path: Pathish) -> None:
    """
    Ensure the directory that will contain `output_path` exists.

    Raises:
        FileSystemError: If the directory cannot be created.
    """
    ensure_directory(os.path.dirname(os.path.abspath(output_path)))
