"""Convert ScanStudio scan files into Carmen FLASER records."""

from __future__ import annotations

import sys
from collections import deque
from typing import Iterable

MAX_READINGS = 10240


def _num(value: float) -> str:
    return f"{value:g}"


def convert_scanstudio(lines: Iterable[str]) -> list[str]:
    """Return the Carmen lines for the scans of a ScanStudio file.

    ``DATA`` is followed by ``NumPoints`` (angle, range) pairs, read across lines.
    Positions and ranges are converted from millimetres to metres.
    """
    source = iter(lines)
    pushed_back: deque[str] = deque()

    def pull() -> str | None:
        return pushed_back.popleft() if pushed_back else next(source, None)

    x = y = theta = 0.0
    nbeams: int | None = None
    output: list[str] = []
    while (line := pull()) is not None:
        tokens = line.split()
        if not tokens:
            continue
        keyword = tokens[0]
        if keyword == "RobotPos:":
            values = [float(t) for t in tokens[1:4]]
            if len(values) == 3:
                x, y, theta = values[0] / 1000, values[1] / 1000, values[2]
        elif keyword == "NumPoints:":
            nbeams = int(tokens[1])
            if nbeams >= MAX_READINGS:
                raise ValueError(f"too many points: {nbeams}")
        elif keyword == "DATA":
            if nbeams is None:
                raise ValueError("DATA block before NumPoints")
            needed = 2 * nbeams
            values: list[str] = []
            while len(values) < needed:
                data_line = pull()
                if data_line is None:
                    break
                data = data_line.split()
                take = needed - len(values)
                values.extend(data[:take])
                if data[take:]:
                    pushed_back.appendleft(" ".join(data[take:]))
            readings = [float(v) / 1000 for v in values[1::2]]
            header = f"FLASER {nbeams} " if len(readings) == nbeams else ""
            ranges = "".join(f"{_num(r)} " for r in readings)
            output.append(
                f"{header}{ranges}{_num(x)} {_num(y)} {_num(theta)}0 0 0 0 pippo 0"
            )
    return output


def main(argv: list[str] | None = None) -> int:
    """Convert the scan file named first into the Carmen file named second."""
    args = sys.argv[1:] if argv is None else argv
    if len(args) < 2:
        print("usage scanstudio2carmen scanfilename carmenfilename")
        return 1
    try:
        with open(args[0]) as handle:
            lines = handle.readlines()
    except OSError:
        print(f"cannot open file {args[0]}")
        return 1
    converted = convert_scanstudio(lines)
    with open(args[1], "w") as out:
        out.writelines(line + "\n" for line in converted)
    return 0