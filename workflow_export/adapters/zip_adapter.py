"""
ZIP source adapter: every ``*.json`` member (any case) is one unit.

Members are read in archive order; directories and other files are ignored.
A corrupt archive (unreadable central directory) fails as a whole with
MalformedDefinitionError. A member that cannot be read (bad CRC, encrypted,
unsupported compression) or has bad content fails alone, when its unit is
parsed.
"""

from __future__ import annotations

import re
import zipfile
import zlib
from pathlib import Path
from typing import Iterator

from workflow_export.adapters.base import DefinitionUnit, SourceProbe
from workflow_kernel.exceptions import MalformedDefinitionError

_JSON_MEMBER = re.compile(r"\.json$", re.IGNORECASE)


def _json_members(archive: zipfile.ZipFile) -> list[zipfile.ZipInfo]:
    return [info for info in archive.infolist() if not info.is_dir() and _JSON_MEMBER.search(info.filename)]


# Raised by ZipFile.read for a single damaged or unreadable member
_MEMBER_READ_ERRORS = (zipfile.BadZipFile, zlib.error, RuntimeError, NotImplementedError, EOFError)


def _read_member(archive: zipfile.ZipFile, info: zipfile.ZipInfo, source_name: str) -> DefinitionUnit:
    try:
        return DefinitionUnit(source_name=source_name, payload=archive.read(info))
    except _MEMBER_READ_ERRORS as e:
        return DefinitionUnit(source_name=source_name, read_error=f"unreadable archive member: {e}")


def _open_archive(source_path: Path) -> zipfile.ZipFile:
    try:
        return zipfile.ZipFile(source_path)
    except zipfile.BadZipFile as e:
        raise MalformedDefinitionError(source_path.name, f"not a readable zip archive: {e}") from e


class ZipDefinitionAdapter:
    """Read the JSON members of a .zip archive."""

    def units(self, source_path: Path) -> Iterator[DefinitionUnit]:
        with _open_archive(source_path) as archive:
            for info in _json_members(archive):
                yield _read_member(archive, info, f"{source_path.name}:{info.filename}")

    def probe(self, source_path: Path) -> SourceProbe:
        with _open_archive(source_path) as archive:
            names = tuple(info.filename for info in _json_members(archive))
        return SourceProbe(unit_count=len(names), unit_names=names)
