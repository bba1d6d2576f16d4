"""
Services for walking a directory tree into the bucket
"""

import os
from dataclasses import dataclass, field
from typing import Iterator

from core.logger import logger
from files.models import FileRecord
from files.services import FileRecordStore
from storage.services import UploadError, upload_file


class WalkError(Exception):
    """The directory tree could not be traversed."""


@dataclass(frozen=True)
class WalkEntry:
    """
    A file found during the walk.

    Attributes:
        path: Filesystem path as produced by the walk
        storage_key: Object key; the path with the root prefix kept verbatim
        relative_path: Path with the root prefix removed, used in the report
    """

    path: str
    storage_key: str
    relative_path: str


@dataclass
class WalkResult:
    """
    Accumulated outcome of a walk.

    Attributes:
        identifiers: Relative path -> generated record id, for files that
            were both uploaded and recorded
        scanned: Files visited
        uploaded: Files stored in the bucket
        recorded: Files with a database record
        errors: Files that failed to upload or record
    """

    identifiers: dict[str, str] = field(default_factory=dict)
    scanned: int = 0
    uploaded: int = 0
    recorded: int = 0
    errors: int = 0


def _raise_walk_error(error: OSError) -> None:
    raise WalkError(f"Error walking through directory: {error}") from error


def iter_files(root: str) -> Iterator[WalkEntry]:
    """
    Yield every non-directory entry below root, depth first in name order.
    Symlinked directories are logged and not followed.

    Raises:
        WalkError: If root or any subdirectory cannot be listed
    """
    if not os.path.isdir(root):
        # os.walk would silently yield nothing for a regular file
        _raise_walk_error(NotADirectoryError(f"Not a directory: {root!r}"))

    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
        dirnames.sort()
        for name in dirnames:
            link = os.path.join(dirpath, name)
            if os.path.islink(link):
                # Not followed, so nothing below it is uploaded
                logger.info(f"Skipping symlinked directory {link}")
        for name in sorted(filenames):
            path = os.path.join(dirpath, name)
            relative_path = path[len(root):]
            yield WalkEntry(
                path=path,
                storage_key=root + relative_path,
                relative_path=relative_path,
            )


def process_file(
    entry: WalkEntry,
    result: WalkResult,
    s3_client,
    store: FileRecordStore,
    bucket: str,
    endpoint: str,
) -> WalkResult:
    """
    Upload one file, record it, and add it to the result.

    Upload and record failures are logged and counted; the file is then
    left out of the identifiers.
    """
    result.scanned += 1

    try:
        url = upload_file(s3_client, entry.path, bucket, entry.storage_key, endpoint)
    except UploadError as e:
        logger.error(f"Failed to upload {entry.path}: {e.cause}")
        result.errors += 1
        return result

    logger.info(f"Uploaded {entry.path} to {url}")
    result.uploaded += 1

    record = store.create(FileRecord(url=url, is_confirmed=True))
    if not record.ok:
        # The object stays in the bucket without a matching row
        logger.error(f"Failed to record {entry.path} ({url}): {record.error}")
        result.errors += 1
        return result

    logger.info(f"Recorded {entry.path} -> {record.identifier}")
    result.recorded += 1
    result.identifiers[entry.relative_path] = record.identifier
    return result


def upload_tree(
    root: str,
    bucket: str,
    s3_client,
    store: FileRecordStore,
    endpoint: str,
) -> WalkResult:
    """
    Upload and record every file below root.

    Args:
        root: Directory to walk
        bucket: Target bucket
        s3_client: boto3 S3 client
        store: Connected record store
        endpoint: Storage endpoint used to build object URLs

    Returns:
        WalkResult with the relative path -> identifier mapping

    Raises:
        WalkError: If the tree cannot be traversed
    """
    logger.info(f"Walking {root} into bucket {bucket}")
    result = WalkResult()
    for entry in iter_files(root):
        result = process_file(entry, result, s3_client, store, bucket, endpoint)
    return result


def format_report(identifiers: dict[str, str]) -> str:
    """Render the path -> identifier mapping, one 'path id' pair per line."""
    lines = ["File name and ID:"]
    lines.extend(f"{path} {identifier}" for path, identifier in identifiers.items())
    return "\n".join(lines)
