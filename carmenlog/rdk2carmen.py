"""Rescale a millimetre log to metres and print its scans as plain Carmen lines."""

from __future__ import annotations

import sys
from typing import Iterable, Iterator

from .carmen import CarmenConfiguration
from .sensorlog import SensorLog
from .sensors import RangeReading, SensorReading


def _num(value: float) -> str:
    return f"{value:g}"


def convert_log(log: Iterable[SensorReading]) -> Iterator[str]:
    """Yield one line per laser scan, ranges and position converted from mm to m."""
    for reading in log:
        if not isinstance(reading, RangeReading):
            continue
        ranges = "".join(f"{_num(r * 0.001)} " for r in reading.readings)
        pose = reading.pose
        yield (
            f"{reading.sensor.name} {len(reading.readings)} {ranges}"
            f"{_num(pose.x * 0.001)} {_num(pose.y * 0.001)} {_num(pose.theta)}"
        )


def main(argv: list[str] | None = None) -> int:
    """Convert the log named first, writing to the second name or to standard output."""
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print("usage rdk2carmen <filename> <outfilename>", file=sys.stderr)
        print("or rdk2carmen <filename> for standard output", file=sys.stderr)
        return -1
    try:
        with open(args[0]) as handle:
            lines = handle.readlines()
    except OSError:
        print(f"no file {args[0]} found", file=sys.stderr)
        return -1
    sensor_map = CarmenConfiguration().load(lines).compute_sensor_map()
    log = SensorLog(sensor_map).load(lines)
    print(f"log size{len(log)}", file=sys.stderr)
    converted = [line + "\n" for line in convert_log(log)]
    if len(args) > 1:
        try:
            with open(args[1], "w") as out:
                out.writelines(converted)
        except OSError:
            print(f"cannot write {args[1]}", file=sys.stderr)
            return -1
    else:
        sys.stdout.writelines(converted)
    return 0