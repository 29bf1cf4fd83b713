"""
Packing of tile records into a tar archive.
"""

import io
import tarfile
from typing import NamedTuple

from bulktiles.processing.fetch import TileRecord


class ArchiveEntry(NamedTuple):
    name: str
    size: int
    payload: bytes

    @classmethod
    def from_record(cls, record: TileRecord) -> "ArchiveEntry":
        return cls(
            name=record.coordinate.name,
            size=len(record.payload),
            payload=record.payload,
        )


class TarPacker:
    """
    Incremental ustar writer. Each call returns the bytes produced so far,
    so the caller can hand them on (e.g. to a compressor) without holding
    the whole archive twice.
    """

    buffer: io.BytesIO
    archive: tarfile.TarFile
    mtime: int
    entries: int

    def __init__(self, mtime: int = 0):
        self.buffer = io.BytesIO()
        self.archive = tarfile.open(
            fileobj=self.buffer, mode="w", format=tarfile.USTAR_FORMAT
        )
        self.mtime = mtime
        self.entries = 0

    def _drain(self) -> bytes:
        data = self.buffer.getvalue()
        self.buffer.seek(0)
        self.buffer.truncate()
        return data

    def add(self, entry: ArchiveEntry) -> bytes:
        info = tarfile.TarInfo(name=entry.name)
        info.size = entry.size
        info.mtime = self.mtime
        info.mode = 0o644

        self.archive.addfile(info, io.BytesIO(entry.payload))
        self.entries += 1

        return self._drain()

    def finalize(self) -> bytes:
        """
        Write the end-of-archive trailer. With no entries added this is a
        valid, empty archive.
        """
        self.archive.close()
        return self._drain()
