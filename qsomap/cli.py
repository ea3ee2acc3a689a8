"""qso-map - summarize an ADIF log as mapped QSO groups

Usage:
  qso-map wsjtx_log.adi                 # groups, positions, counts
  qso-map wsjtx_log.adi -g CM98kq       # add distance/bearing from home grid
  qso-map wsjtx_log.adi -b 20M -m FT8   # filter by band and mode
  qso-map wsjtx_log.adi --json          # machine-readable output
  qso-map --dump-config                 # emit default config to stdout

Config file: ~/.config/qsomap/config.yaml
  callsign: W1AW
  grid: CM98kq
  adif_file: ~/wsjtx_log.adi
  band: ALL
  mode: ALL
  log_level: WARNING
"""

import argparse
import json
import sys
from pathlib import Path

import yaml

from .adif import LogReadError
from .config import DEFAULT_CONFIG, load_config
from .geo_utils import bearing_to_direction
from .logging_config import setup_logging
from .qso_map import MappedQso, QsoMap, build_log_map, load_log_file, set_home_location


def mapped_to_dict(mapped: MappedQso) -> dict:
    group = mapped.group
    entry = {
        "call": group.get("CALL") or "N/A",
        "band": group.get("BAND") or "N/A",
        "mode": group.get("MODE") or "N/A",
        "grid": group.get("GRIDSQUARE") or "",
        "count": group.count,
        "first_qso": dict(group.first_qso),
        "last_qso": dict(group.last_qso),
        "lat": mapped.lat,
        "lon": mapped.lon,
        "source": mapped.position.source,
    }
    if mapped.distance_km is not None:
        entry["distance_km"] = mapped.distance_km
        entry["bearing_deg"] = mapped.bearing_deg
    return entry


def map_to_dict(qso_map: QsoMap, bands: list[str], modes: list[str]) -> dict:
    home = qso_map.home
    return {
        "home": {"grid": home.grid, "lat": home.point.lat, "lon": home.point.lon} if home else None,
        "total_count": qso_map.total_count,
        "mapped_count": qso_map.mapped_count,
        "bands": bands,
        "modes": modes,
        "qsos": [mapped_to_dict(m) for m in qso_map.mapped],
        "grids": {grid: bounds for grid, bounds in qso_map.overlays.items()},
    }


def format_mapped(mapped: MappedQso) -> str:
    """One summary line for a mapped QSO group."""
    group = mapped.group
    last = group.last_qso
    date = last.get("QSO_DATE") or "N/A"
    time = last.get("TIME_ON") or "N/A"
    count = f" ({group.count} contacts)" if group.count > 1 else ""
    call = group.get("CALL") or "N/A"
    band = group.get("BAND") or "N/A"
    mode = group.get("MODE") or "N/A"
    line = (f"{call:<10} {band:>5} {mode:<6}"
            f" last {date} {time}Z  {mapped.lat:8.4f} {mapped.lon:9.4f}  {mapped.position.source}{count}")
    if mapped.distance_km is not None:
        line += (f"  {mapped.distance_km:.0f} km @ {mapped.bearing_deg:.0f}°"
                 f" {bearing_to_direction(mapped.bearing_deg)}")
    return line


def print_summary(qso_map: QsoMap, bands: list[str], modes: list[str]) -> None:
    if qso_map.home:
        home = qso_map.home
        print(f"Home: {home.grid} ({home.point.lat:.2f}, {home.point.lon:.2f})")
    print(f"QSOs: {qso_map.total_count}  Mapped: {qso_map.mapped_count}")
    print(f"Bands: {', '.join(bands)}")
    print(f"Modes: {', '.join(modes)}")
    print()
    for mapped in qso_map.mapped:
        print(format_mapped(mapped))
    if qso_map.grids:
        print(f"\nGrid squares: {', '.join(qso_map.grids)}")


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Summarize an ADIF log as mapped QSO groups")
    p.add_argument("adif", nargs="?", type=Path, help="ADIF log file")
    p.add_argument("-g", "--grid", help="Home grid square")
    p.add_argument("-b", "--band", help="Band filter (default: ALL)")
    p.add_argument("-m", "--mode", help="Mode filter (default: ALL)")
    p.add_argument("--json", action="store_true", help="Print JSON instead of a table")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    p.add_argument("--config", type=Path, help="Config file")
    p.add_argument("--dump-config", action="store_true", help="Emit default config to stdout")
    args = p.parse_args(argv)

    if args.dump_config:
        print(yaml.dump(DEFAULT_CONFIG, default_flow_style=False, sort_keys=False))
        return 0

    cfg = load_config(args.config)
    setup_logging("DEBUG" if args.verbose else cfg["log_level"])

    adif_path = args.adif or (Path(cfg["adif_file"]).expanduser() if cfg["adif_file"] else None)
    if adif_path is None:
        p.error("ADIF file is required (argument or adif_file in config)")

    grid = args.grid or cfg["grid"]
    home = None
    if grid:
        home = set_home_location(str(grid))
        if home is None:
            print(f"Warning: Invalid home grid '{grid}', distances not shown", file=sys.stderr)

    try:
        log = load_log_file(adif_path)
    except LogReadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    band = str(args.band or cfg["band"]).upper()
    mode = str(args.mode or cfg["mode"]).upper()
    qso_map = build_log_map(log, home=home, band=band, mode=mode)
    bands, modes = log.filter_options()

    if args.json:
        print(json.dumps(map_to_dict(qso_map, bands, modes), indent=2))
    else:
        print_summary(qso_map, bands, modes)
    return 0


if __name__ == "__main__":
    sys.exit(main())
