"""Group repeated QSOs by station, band and 4-character grid square."""

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass

from .adif import RawRecord

logger = logging.getLogger(__name__)

NO_CALL = "NOCALL"
NO_BAND = "N/A"
NO_GRID = "NOGRID"
NO_MODE = "N/A"
ALL = "ALL"


@dataclass
class QsoGroup(Mapping):
    """All contacts with one station on one band from one 4-char grid.

    Reads like the first contact's record (group["CALL"], group.get("LAT"))
    and carries the contact count plus the first and last contacts.
    """
    fields: RawRecord
    count: int
    first_qso: RawRecord
    last_qso: RawRecord

    def __getitem__(self, tag: str) -> str:
        return self.fields[tag]

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    @property
    def key(self) -> tuple[str, str, str]:
        return group_key(self.fields)


def group_key(qso: RawRecord) -> tuple[str, str, str]:
    """Aggregation key (call, band, grid4) with defaults for missing fields.

    Only the 4-character square is used, so FN20AB and FN20XY fall in the
    same group as plain FN20.
    """
    call = qso.get("CALL") or NO_CALL
    band = qso.get("BAND") or NO_BAND
    grid = qso.get("GRIDSQUARE") or ""
    grid = grid[:4] if len(grid) >= 4 else NO_GRID
    return call, band, grid


def qso_timestamp(qso: RawRecord) -> str:
    """QSO_DATE + TIME_ON as a sortable string.

    Assumes ADIF fixed-width fields (YYYYMMDD, HHMM or HHMMSS) so that
    string order is time order. Missing fields count as empty.
    """
    return (qso.get("QSO_DATE") or "") + (qso.get("TIME_ON") or "")


def aggregate_qsos(records: Iterable[RawRecord]) -> list[QsoGroup]:
    """Fold raw QSO records into one group per (call, band, grid4).

    Groups come back in order of first appearance. first_qso is the first
    record seen for the key and is never replaced, even by an earlier-dated
    record later in the input; last_qso is the record with the greatest
    QSO_DATE + TIME_ON string.

    Args:
        records: Parsed records, e.g. from parse_adif()

    Returns:
        List of QsoGroup
    """
    groups: dict[tuple[str, str, str], QsoGroup] = {}
    total = 0

    for qso in records:
        total += 1
        key = group_key(qso)
        group = groups.get(key)
        if group is None:
            groups[key] = QsoGroup(fields=qso, count=1, first_qso=qso, last_qso=qso)
            continue

        group.count += 1
        if qso_timestamp(qso) > qso_timestamp(group.last_qso):
            group.last_qso = qso

    logger.debug("Aggregated %d QSOs into %d groups", total, len(groups))
    return list(groups.values())


def filter_options(groups: Iterable[Mapping[str, str]]) -> tuple[list[str], list[str]]:
    """Distinct bands and modes for building filter choices.

    Returns:
        (bands, modes), each sorted and including "ALL"
    """
    bands = {ALL}
    modes = {ALL}
    for qso in groups:
        if qso.get("BAND"):
            bands.add(qso["BAND"])
        if qso.get("MODE"):
            modes.add(qso["MODE"])
    return sorted(bands), sorted(modes)


def filter_qsos(groups: Iterable[QsoGroup], band: str = ALL, mode: str = ALL) -> list[QsoGroup]:
    """Keep groups matching a band and mode selection ("ALL" matches anything)."""
    selected = []
    for group in groups:
        if band != ALL and (group.get("BAND") or NO_BAND) != band:
            continue
        if mode != ALL and (group.get("MODE") or NO_MODE) != mode:
            continue
        selected.append(group)
    return selected
