"""Reading from and creating zip archives."""

import os
import zipfile


def read_file_from_zip(zip_file: str, file_name: str) -> bytes:
    """Return the content of the first entry named ``file_name`` in ``zip_file``."""
    with zipfile.ZipFile(zip_file) as archive:
        info = next((i for i in archive.infolist() if i.filename == file_name), None)
        if info is None:
            raise FileNotFoundError(f"{file_name} not found in zip file {zip_file}")
        return archive.read(info)


def _add_files(archive: zipfile.ZipFile, base_path: str, base_in_zip: str, skip_name: str) -> None:
    with os.scandir(base_path) as it:
        entries = sorted(it, key=lambda e: e.name)
    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            _add_files(archive, entry.path, f"{base_in_zip}{entry.name}/", skip_name)
            continue
        # the archive itself may live inside the folder being zipped
        if entry.name.casefold() == skip_name.casefold():
            continue
        with open(entry.path, "rb") as handle:
            archive.writestr(base_in_zip + entry.name, handle.read())


def zip_folder(folder: str, zip_file: str) -> None:
    """Zip every file under ``folder`` into ``zip_file``, keeping relative paths."""
    skip_name = os.path.basename(zip_file)
    with zipfile.ZipFile(zip_file, "w", zipfile.ZIP_DEFLATED) as archive:
        _add_files(archive, folder, "", skip_name)