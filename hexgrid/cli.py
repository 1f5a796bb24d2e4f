#!/usr/bin/env python
"""
Command line access to the grid engine.

Usage:
    hexgrid encode 37.775938728915946 -122.41795063018799 --res 9
    hexgrid decode 8928308280fffff
    hexgrid disk 8928308280fffff -k 2
    hexgrid distance 8928308280fffff 8928308280bffff
    hexgrid parent 8928308280fffff --res 5
    hexgrid children 85283083fffffff --res 6
    hexgrid boundary 8928308280fffff
    hexgrid area 8928308280fffff
"""

import argparse
import logging
import sys
from typing import List, Optional

from .codec import decode, encode
from .config import get_config, load_config, set_config
from .coordinates import GeoCoordinate
from .errors import HexGridError
from .hierarchy import children, parent
from .index import from_string, to_string
from .metrics import area_km2, area_m2, boundary
from .traversal import grid_disk_distances, grid_distance

logger = logging.getLogger(__name__)


def _cmd_encode(args) -> None:
    h = encode(GeoCoordinate(args.lat, args.lng), args.res)
    print(to_string(h))


def _cmd_decode(args) -> None:
    coord = decode(from_string(args.cell))
    print(f"{coord.lat:.9f} {coord.lng:.9f}")


def _cmd_disk(args) -> None:
    for entry in grid_disk_distances(from_string(args.cell), args.k):
        print(f"{to_string(entry.index)} {entry.distance}")


def _cmd_distance(args) -> None:
    print(grid_distance(from_string(args.a), from_string(args.b)))


def _cmd_parent(args) -> None:
    print(to_string(parent(from_string(args.cell), args.res)))


def _cmd_children(args) -> None:
    for child in children(from_string(args.cell), args.res):
        print(to_string(child))


def _cmd_boundary(args) -> None:
    for vert in boundary(from_string(args.cell)):
        print(f"{vert.lat:.9f} {vert.lng:.9f}")


def _cmd_area(args) -> None:
    h = from_string(args.cell)
    print(f"{area_km2(h):.6f} km2")
    print(f"{area_m2(h):.3f} m2")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hexgrid", description="Hierarchical hexagonal grid tools")
    parser.add_argument("--config", help="YAML config overriding the packaged defaults")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log at DEBUG level")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("encode", help="Cell containing a point")
    p.add_argument("lat", type=float, help="Latitude in degrees")
    p.add_argument("lng", type=float, help="Longitude in degrees")
    p.add_argument("--res", type=int, required=True, help="Resolution 0-15")
    p.set_defaults(func=_cmd_encode)

    p = sub.add_parser("decode", help="Centre of a cell")
    p.add_argument("cell")
    p.set_defaults(func=_cmd_decode)

    p = sub.add_parser("disk", help="Cells within k steps, with distances")
    p.add_argument("cell")
    p.add_argument("-k", type=int, default=1, help="Disk radius")
    p.set_defaults(func=_cmd_disk)

    p = sub.add_parser("distance", help="Grid distance between two cells")
    p.add_argument("a")
    p.add_argument("b")
    p.set_defaults(func=_cmd_distance)

    p = sub.add_parser("parent", help="Ancestor at a coarser resolution")
    p.add_argument("cell")
    p.add_argument("--res", type=int, required=True)
    p.set_defaults(func=_cmd_parent)

    p = sub.add_parser("children", help="Descendants at a finer resolution")
    p.add_argument("cell")
    p.add_argument("--res", type=int, required=True)
    p.set_defaults(func=_cmd_children)

    p = sub.add_parser("boundary", help="Cell vertices, counter-clockwise")
    p.add_argument("cell")
    p.set_defaults(func=_cmd_boundary)

    p = sub.add_parser("area", help="Cell area")
    p.add_argument("cell")
    p.set_defaults(func=_cmd_area)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.config:
        set_config(load_config(args.config))
    config = get_config()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level,
        format=config.log_format,
    )

    try:
        args.func(args)
    except HexGridError as e:
        logger.error(f"{e.code.name}: {e.message}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
