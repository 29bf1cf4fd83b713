"""
Archive formats, keyed by the extension used in request paths.
"""

from pydantic import BaseModel

from bulktiles.errors import UnsupportedFormatError

from .compression import Encoding


class ArchiveFormat(BaseModel):
    ext: str
    archive: str
    encoding: Encoding
    media_type: str


FORMATS: dict[str, ArchiveFormat] = {
    x.ext: x
    for x in [
        ArchiveFormat(
            ext="tar",
            archive="tar",
            encoding=Encoding.NONE,
            media_type="application/x-tar",
        ),
        ArchiveFormat(
            ext="tar.gz",
            archive="tar",
            encoding=Encoding.GZIP,
            media_type="application/x-tar+gzip",
        ),
        ArchiveFormat(
            ext="tar.br",
            archive="tar",
            encoding=Encoding.BROTLI,
            media_type="application/x-tar+brotli",
        ),
    ]
}


def resolve_format(ext: str) -> ArchiveFormat:
    try:
        return FORMATS[ext]
    except KeyError:
        raise UnsupportedFormatError(ext)
