"""ADIF log parsing.

Everything up to the first <EOH> is the file header and is skipped; the
rest is split into records at <EOR>. Fields look like <TAG:LENGTH>VALUE
or <TAG:LENGTH:TYPE>VALUE.
The declared LENGTH is not trusted: a value runs up to the next '<' and is
trimmed, so logs with miscounted lengths still parse. The flip side is that
a value containing a literal '<' is cut short.

The whole text is upper-cased before scanning, so tags and values are
case-insensitive and every value comes back upper case.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

logger = logging.getLogger(__name__)

EOR = "<EOR>"
EOH = "<EOH>"

RawRecord = Mapping[str, str]

# Scanner states
SEEK_TAG = 0
READ_TAG = 1
READ_LENGTH = 2
READ_TYPE = 3
READ_VALUE = 4

TAG_CHARS = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_")
DIGITS = frozenset("0123456789")


class LogReadError(Exception):
    """Raised when a log file cannot be read at all."""


def parse_fields(record: str) -> dict[str, str]:
    """Extract tag/value fields from one record segment.

    Single left-to-right pass. Anything that does not fit the
    <TAG:LENGTH[:TYPE]> pattern is skipped.

    Args:
        record: Upper-cased text between two <EOR> markers

    Returns:
        Dict of tag -> trimmed value (whitespace-only values become "")
    """
    fields: dict[str, str] = {}
    state = SEEK_TAG
    tag_start = tag_end = value_start = 0
    has_length = False

    for i, ch in enumerate(record):
        if state == READ_VALUE and ch != "<":
            continue

        if state == READ_VALUE:
            _store(fields, record[tag_start:tag_end], record[value_start:i])
            state = SEEK_TAG

        if state == SEEK_TAG:
            if ch == "<":
                state, tag_start = READ_TAG, i + 1
        elif state == READ_TAG:
            if ch in TAG_CHARS:
                continue
            if ch == ":" and i > tag_start:
                state, tag_end, has_length = READ_LENGTH, i, False
            elif ch == "<":
                tag_start = i + 1
            else:
                state = SEEK_TAG
        elif state == READ_LENGTH:
            if ch in DIGITS:
                has_length = True
            elif ch == ">" and has_length:
                state, value_start = READ_VALUE, i + 1
            elif ch == ":" and has_length:
                state = READ_TYPE
            elif ch == "<":
                state, tag_start = READ_TAG, i + 1
            else:
                state = SEEK_TAG
        elif state == READ_TYPE:
            if ch == ">":
                state, value_start = READ_VALUE, i + 1
            elif ch == "<":
                state, tag_start = READ_TAG, i + 1
            elif not ch.isalpha():
                state = SEEK_TAG

    if state == READ_VALUE:
        _store(fields, record[tag_start:tag_end], record[value_start:])

    return fields


def _store(fields: dict[str, str], tag: str, value: str) -> None:
    # A tag directly followed by the next tag carries no value at all; a
    # whitespace-only value is kept as "" and still counts as a field
    if value:
        fields[tag] = value.strip()


def parse_adif(adif_text: str) -> list[RawRecord]:
    """Parse ADIF text into a list of read-only records.

    Never raises on malformed content: bad fields are skipped and records
    without any usable field are dropped.

    Args:
        adif_text: Full contents of an .adi file

    Returns:
        List of mappings (tag -> value), one per QSO, in file order
    """
    qsos: list[RawRecord] = []
    skipped = 0

    header, eoh, body = adif_text.upper().partition(EOH)
    if not eoh:
        body = header  # no header, entire text is records

    for record in body.split(EOR):
        if not record.strip():
            continue
        fields = parse_fields(record)
        if fields:
            qsos.append(MappingProxyType(fields))
        else:
            skipped += 1

    logger.debug("Parsed %d QSO records (%d empty segments dropped)", len(qsos), skipped)
    return qsos


def read_adif_file(path: Path | str) -> str:
    """Read an ADIF file as text.

    Undecodable bytes are replaced rather than rejected; only an I/O
    failure is an error.

    Raises:
        LogReadError: if the file cannot be opened or read
    """
    path = Path(path)
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise LogReadError(f"Could not read {path}: {e}") from e


def load_adif_file(path: Path | str) -> list[RawRecord]:
    """Read and parse an ADIF file."""
    return parse_adif(read_adif_file(path))
