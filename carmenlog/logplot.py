"""Turn the laser scans of a Carmen log into gnuplot commands, one GIF per frame."""

from __future__ import annotations

import sys
from typing import Iterable, Iterator

from .carmen import CarmenConfiguration
from .sensorlog import SensorLog
from .sensors import RangeReading, SensorReading


def _num(value: float) -> str:
    return f"{value:g}"


def gnuplot_frames(log: Iterable[SensorReading], maxrange: float = 2.0) -> Iterator[str]:
    """Yield gnuplot lines plotting every third laser scan, short ranges only."""
    count = 0
    frame = 0
    for reading in log:
        if not isinstance(reading, RangeReading):
            continue
        count += 1
        if count % 3:
            continue
        beams = reading.sensor.beams
        points = [
            (r * beam.c, r * beam.s)
            for r, beam in zip(reading.readings, beams)
            if r <= maxrange
        ]
        if not points:
            continue
        yield "set terminal gif"
        yield f'set output "frame-{frame:05d}.gif"'
        yield "set size ratio -1"
        yield "plot [-3:3][0:3] '-' w p ps 1"
        for x, y in points:
            yield f"{_num(y)} {_num(x)}"
        yield "e"
        frame += 1


def main(argv: list[str] | None = None) -> int:
    """Print gnuplot commands for the log named on the command line."""
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print("usage log_plot <filename> | gnuplot")
        return -1
    try:
        with open(args[0]) as handle:
            lines = handle.readlines()
    except OSError:
        print(f"no file {args[0]} found")
        return -1
    sensor_map = CarmenConfiguration().load(lines).compute_sensor_map()
    log = SensorLog(sensor_map).load(lines)
    print(f"log size{len(log)}", file=sys.stderr)
    for line in gnuplot_frames(log):
        print(line)
    return 0