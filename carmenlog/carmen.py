"""Carmen log configuration: PARAM records and the sensors they describe."""

from __future__ import annotations

import logging
import math
import re
from typing import Iterable

from .sensors import (
    Beam,
    Configuration,
    OdometrySensor,
    OrientedPoint,
    RangeSensor,
    SensorMap,
)

_log = logging.getLogger(__name__)

_FLOAT_PREFIX = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INT_PREFIX = re.compile(r"\s*[+-]?\d+")

_SONAR_SPAN = math.pi / 180.0 * 7.5
_FINE_RESOLUTION = 360.0 / 1024.0

# beam count -> (resolution in degrees, maximum range or None for the default)
_COMMON_RESOLUTIONS: dict[int, tuple[float, float | None]] = {
    180: (1.0, None),
    181: (1.0, None),
    360: (0.5, None),
    361: (0.5, None),
    540: (0.5, None),
    541: (0.5, None),
}
_FLASER_RESOLUTIONS = {
    **_COMMON_RESOLUTIONS,
    769: (_FINE_RESOLUTION, 4.1),
    682: (_FINE_RESOLUTION, 4.1),
    683: (_FINE_RESOLUTION, 5.5),
}
_ROBOTLASER1_RESOLUTIONS = {
    **_COMMON_RESOLUTIONS,
    769: (_FINE_RESOLUTION, None),
    683: (_FINE_RESOLUTION, 5.5),
}
_REAR_RESOLUTIONS = {
    **_COMMON_RESOLUTIONS,
    769: (_FINE_RESOLUTION, None),
}


def _atof(text: str) -> float:
    match = _FLOAT_PREFIX.match(text)
    return float(match.group()) if match else 0.0


def _atoi(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group()) if match else 0


def _laser_beams(count: int, resolution: float, max_range: float) -> list[Beam]:
    """Lay out ``count`` beams symmetrically around the sensor heading."""
    beams = [Beam(max_range=max_range) for _ in range(count)]
    low = count // 2
    up = (count + 1) // 2
    step = resolution * math.pi / 180.0
    odd = count % 2 == 1
    angle = 0.0 if odd else step
    for i in range(0 if odd else 1, low + 1):
        beams[low - i] = Beam(OrientedPoint(theta=-angle), max_range=max_range)
        beams[up + i - 1] = Beam(OrientedPoint(theta=angle), max_range=max_range)
        angle += step
    return beams


class CarmenConfiguration(dict, Configuration):
    """The PARAM records of a Carmen log, keyed by parameter name."""

    def load(self, stream: Iterable[str]) -> CarmenConfiguration:
        """Read PARAM records and laser beam counts from the lines of a log."""
        self.clear()
        laser_on = False
        rear_on = False
        beams = ""
        rear_beams = ""
        for line in stream:
            tokens = line.split()
            if not tokens:
                continue
            qualifier, rest = tokens[0], tokens[1:]
            if qualifier == "FLASER":
                laser_on = True
                if rest:
                    beams = rest[0]
            elif qualifier == "RLASER":
                rear_on = True
                if rest:
                    rear_beams = rest[0]
            elif qualifier == "ROBOTLASER1":
                laser_on = True
                if len(rest) > 7:
                    beams = rest[7]
            elif qualifier == "ROBOTLASER2":
                rear_on = True
                if len(rest) > 7:
                    rear_beams = rest[7]
            elif qualifier == "PARAM" and rest:
                self.setdefault(rest[0], rest[1:])
        if laser_on:
            self.setdefault("laser_beams", [beams])
            self.setdefault("robot_use_laser", ["on"])
            _log.debug("front laser beams from log: %s", beams)
        if rear_on:
            self.setdefault("rear_laser_beams", [rear_beams])
            self.setdefault("robot_use_rear_laser", ["on"])
            _log.debug("rear laser beams from log: %s", rear_beams)
        return self

    def _first(self, key: str) -> str | None:
        values = self.get(key)
        return values[0] if values else None

    def _beam_count(self, key: str) -> int:
        value = self._first(key)
        count = 180 if value is None else _atoi(value)
        if count < 0:
            raise ValueError(f"negative beam count for {key}: {count}")
        return count

    def _sonar(self) -> RangeSensor:
        sonar = RangeSensor("SONAR")
        max_range = 10.0
        value = self._first("robot_max_sonar")
        if value is not None:
            max_range = _atof(value)
        count = 0
        value = self._first("robot_num_sonars")
        if value is not None:
            count = _atoi(value)
        offsets = self.get("robot_sonar_offsets")
        if offsets is not None:
            if len(offsets) // 3 < count:
                raise ValueError(
                    f"{len(offsets)} parameters define the sonar offsets while "
                    f"{count} sonars require at least {count * 3}"
                )
            for i in range(count):
                x, y, theta = offsets[3 * i : 3 * i + 3]
                sonar.beams.append(
                    Beam(
                        OrientedPoint(_atof(x), _atof(y), _atof(theta)),
                        span=_SONAR_SPAN,
                        max_range=max_range,
                    )
                )
        sonar.update_beams_lookup()
        return sonar

    def _laser(
        self,
        name: str,
        *,
        beams_key: str,
        resolution_key: str,
        offset_key: str | None,
        heading: float,
        max_range: float,
        resolutions: dict[int, tuple[float, float | None]],
        new_format: bool,
    ) -> RangeSensor:
        laser = RangeSensor(name, pose=OrientedPoint(theta=heading), new_format=new_format)
        if offset_key is not None:
            value = self._first(offset_key)
            if value is not None:
                laser.pose.x = _atof(value)
        count = self._beam_count(beams_key)
        resolution = 1.0
        if count in resolutions:
            resolution, special_range = resolutions[count]
            if special_range is not None:
                max_range = special_range
        else:
            value = self._first(resolution_key)
            if value is not None:
                resolution = _atof(value)
        laser.beams = _laser_beams(count, resolution, max_range)
        laser.update_beams_lookup()
        return laser

    def compute_sensor_map(self) -> SensorMap:
        """Build the sensors that the loaded parameters describe."""
        smap: SensorMap = {}
        for sensor in (OdometrySensor("ODOM"), OdometrySensor("TRUEPOS", ideal=True)):
            smap[sensor.name] = sensor
        if self._first("robot_use_sonar") == "on":
            smap["SONAR"] = self._sonar()
        if self._first("robot_use_laser") == "on":
            front = dict(
                beams_key="laser_beams",
                resolution_key="laser_front_laser_resolution",
                offset_key="robot_frontlaser_offset",
                heading=0.0,
                max_range=50.0,
            )
            smap["FLASER"] = self._laser(
                "FLASER", resolutions=_FLASER_RESOLUTIONS, new_format=False, **front
            )
            smap["ROBOTLASER1"] = self._laser(
                "ROBOTLASER1", resolutions=_ROBOTLASER1_RESOLUTIONS, new_format=True, **front
            )
        if self._first("robot_use_rear_laser") == "on":
            smap["RLASER"] = self._laser(
                "RLASER",
                beams_key="rear_laser_beams",
                resolution_key="laser_rear_laser_resolution",
                offset_key="robot_rearlaser_offset",
                heading=math.pi,
                max_range=89.0,
                resolutions=_REAR_RESOLUTIONS,
                new_format=False,
            )
            smap["ROBOTLASER2"] = self._laser(
                "ROBOTLASER2",
                beams_key="rear_laser_beams",
                resolution_key="laser_rear_laser_resolution",
                offset_key=None,
                heading=math.pi,
                max_range=50.0,
                resolutions=_REAR_RESOLUTIONS,
                new_format=True,
            )
        return smap