"""Copying files and directory trees."""

import os
import shutil


class CopyError(OSError):
    """Raised when a file or directory cannot be copied."""


def copy_directory(src: str, dest: str) -> None:
    """Copy every file under ``src`` into ``dest``, creating ``dest`` if needed.

    Subdirectories are copied recursively. Owners and permissions are not
    preserved, and files already in ``dest`` are left in place.
    """
    try:
        entries = sorted(os.listdir(src))
    except OSError as err:
        raise CopyError(f"failed to read the directory {src}: {err}") from err

    if not os.path.exists(dest):
        try:
            os.mkdir(dest, 0o755)
        except OSError as err:
            raise CopyError(f"failed to create the directory {dest}: {err}") from err

    for name in entries:
        src_path = os.path.join(src, name)
        dest_path = os.path.join(dest, name)
        try:
            is_dir = os.path.isdir(src_path)
            os.stat(src_path)
        except OSError as err:
            raise CopyError(f"failed to retrieve the stats of the file {src_path}: {err}") from err

        if is_dir:
            try:
                copy_directory(src_path, dest_path)
            except CopyError as err:
                raise CopyError(
                    f"failed to copy the directory from {src_path} to {dest_path}: {err}"
                ) from err
        else:
            try:
                copy_file(src_path, dest_path)
            except CopyError as err:
                raise CopyError(
                    f"failed to copy file from {src_path} to {dest_path}: {err}"
                ) from err


def copy_file(src: str, dest: str) -> None:
    """Copy ``src`` to ``dest``, overwriting ``dest`` if it exists."""
    try:
        out = open(dest, "wb")
    except OSError as err:
        raise CopyError(f"failed to create the file {dest}: {err}") from err
    with out:
        try:
            source = open(src, "rb")
        except OSError as err:
            raise CopyError(f"failed to read the file {src}: {err}") from err
        with source:
            try:
                shutil.copyfileobj(source, out)
            except OSError as err:
                raise CopyError(f"failed to copy the file content: {err}") from err