"""
ZIP container for packages: pack a working directory into a .pptx and unpack
a .pptx (or .potx) into a working directory.
"""

import logging
import os
import zipfile

from .constants import CONTENT_TYPES_PART
from .errors import NotFoundError, PackageStructureError

logger = logging.getLogger(__name__)

SKIPPED_FILES = ('.DS_Store',)


def _archive_order(name):
    """[Content_Types].xml first, then the package relationships, then alphabetical."""
    if name == CONTENT_TYPES_PART:
        return (0, name)
    if name.startswith('_rels/'):
        return (1, name)
    return (2, name)


def list_package_files(work_dir):
    """Every file under work_dir as a '/'-separated archive name, in archive order."""
    names = []
    for dirpath, dirnames, filenames in os.walk(work_dir):
        dirnames.sort()
        for filename in filenames:
            if filename in SKIPPED_FILES:
                continue
            full = os.path.join(dirpath, filename)
            names.append(os.path.relpath(full, work_dir).replace(os.sep, '/'))
    return sorted(names, key=_archive_order)


def pack(work_dir, output):
    """
    Pack an unpacked package directory into a .pptx file.

    Args:
        work_dir: Package directory
        output: Path of the .pptx to write; an existing file is replaced

    Returns:
        Absolute path of the written file

    Raises:
        NotFoundError: work_dir does not exist
        PackageStructureError: work_dir has no [Content_Types].xml
    """
    work_dir = os.path.abspath(work_dir)
    output = os.path.abspath(output)
    if not os.path.isdir(work_dir):
        raise NotFoundError(f'Working directory not found: {work_dir}')
    if not os.path.isfile(os.path.join(work_dir, CONTENT_TYPES_PART)):
        raise PackageStructureError(f'Invalid package structure: {CONTENT_TYPES_PART} not found')

    names = list_package_files(work_dir)
    os.makedirs(os.path.dirname(output), exist_ok=True)
    if os.path.exists(output):
        os.remove(output)

    with zipfile.ZipFile(output, 'w', zipfile.ZIP_DEFLATED) as zf:
        for name in names:
            zf.write(os.path.join(work_dir, *name.split('/')), name)

    logger.info(f'Created: {output} ({len(names)} files)')
    return output


def unpack(input_path, out_dir):
    """
    Extract a .pptx/.potx archive into a directory.

    Raises:
        NotFoundError: the archive does not exist
        PackageStructureError: the file is not a ZIP archive or an entry
            would be written outside out_dir
    """
    input_path = os.path.abspath(input_path)
    out_dir = os.path.abspath(out_dir)
    if not os.path.isfile(input_path):
        raise NotFoundError(f'Input file not found: {input_path}')

    try:
        zf = zipfile.ZipFile(input_path)
    except zipfile.BadZipFile:
        raise PackageStructureError(f'Not a ZIP archive: {input_path}') from None

    os.makedirs(out_dir, exist_ok=True)
    with zf:
        for info in zf.infolist():
            target = os.path.abspath(os.path.join(out_dir, *info.filename.split('/')))
            if os.path.commonpath([out_dir, target]) != out_dir:
                raise PackageStructureError(f'Archive entry outside target directory: {info.filename}')
            if info.is_dir():
                os.makedirs(target, exist_ok=True)
                continue
            os.makedirs(os.path.dirname(target), exist_ok=True)
            with open(target, 'wb') as f:
                f.write(zf.read(info))

    logger.info(f'Unpacked to: {out_dir}')
    return out_dir
