"""A sensor log: readings parsed from the lines of a Carmen log file."""

from __future__ import annotations

from typing import Iterable, Iterator

from .sensors import (
    OdometryReading,
    OdometrySensor,
    OrientedPoint,
    RangeReading,
    RangeSensor,
    SensorMap,
    SensorReading,
)


class _Fields:
    """Reads whitespace-separated fields, giving up after the first bad one.

    A missing field leaves the current value; a malformed one yields zero.
    Either way every later read leaves its current value.
    """

    def __init__(self, tokens: Iterable[str]) -> None:
        self._tokens: Iterator[str] = iter(tokens)
        self.ok = True

    def _next(self) -> str | None:
        if not self.ok:
            return None
        token = next(self._tokens, None)
        if token is None:
            self.ok = False
        return token

    def number(self, current: float = 0.0) -> float:
        token = self._next()
        if token is None:
            return current
        try:
            return float(token)
        except ValueError:
            self.ok = False
            return 0.0

    def integer(self, current: int = 0) -> int:
        token = self._next()
        if token is None:
            return current
        try:
            return int(token)
        except ValueError:
            self.ok = False
            return 0

    def word(self, current: str = "") -> str:
        token = self._next()
        return current if token is None else token

    def skip_words(self, count: int) -> None:
        for _ in range(count):
            self.word()


def parse_odometry(tokens: Iterable[str], sensor: OdometrySensor) -> OdometryReading:
    """Parse the fields of an odometry record that follow the sensor name."""
    fields = _Fields(tokens)
    pose = OrientedPoint(fields.number(), fields.number(), fields.number())
    speed_x = fields.number()
    speed_theta = fields.number()
    accel_x = fields.number()
    return OdometryReading(
        sensor,
        pose=pose,
        speed=OrientedPoint(speed_x, 0.0, speed_theta),
        acceleration=OrientedPoint(accel_x, 0.0, 0.0),
    )


def parse_range(tokens: Iterable[str], sensor: RangeSensor) -> RangeReading:
    """Parse the fields of a laser record that follow the sensor name."""
    fields = _Fields(tokens)
    if sensor.new_format:
        fields.skip_words(7)
    size = fields.integer()
    if size != len(sensor.beams):
        raise ValueError(
            f"{sensor.name} record has {size} readings, sensor has {len(sensor.beams)} beams"
        )
    readings = [fields.number() for _ in range(size)]
    if sensor.new_format:
        for _ in range(fields.integer()):
            fields.number()
    for _ in range(3):
        fields.number()  # laser pose, unused
    pose = OrientedPoint(fields.number(), fields.number(), fields.number())
    time = 0.0
    if sensor.new_format:
        fields.skip_words(5)
    else:
        time = fields.number(time)
        fields.number()
        fields.number()
    time = fields.number(time)
    fields.word()
    time = fields.number(time)
    return RangeReading(sensor, time=time, readings=readings, pose=pose)


class SensorLog(list):
    """The readings of a log, in file order, for the sensors of a sensor map."""

    def __init__(self, sensor_map: SensorMap, readings: Iterable[SensorReading] = ()) -> None:
        super().__init__(readings)
        self.sensor_map = sensor_map

    def load(self, stream: Iterable[str]) -> SensorLog:
        """Replace the contents with the readings found in the lines of ``stream``."""
        self.clear()
        for line in stream:
            tokens = line.split()
            if not tokens:
                continue
            sensor = self.sensor_map.get(tokens[0])
            if isinstance(sensor, OdometrySensor):
                self.append(parse_odometry(tokens[1:], sensor))
            elif isinstance(sensor, RangeSensor):
                self.append(parse_range(tokens[1:], sensor))
        return self

    def bounding_box(self) -> tuple[OrientedPoint, tuple[float, float, float, float]]:
        """Return the first laser pose and the ``(xmin, ymin, xmax, ymax)`` of the poses.

        The x bounds span all odometry and laser poses; the y bounds are both
        taken from the last reading.
        """
        xmin = ymin = 1e6
        xmax = ymax = -1e6
        start: OrientedPoint | None = None
        for reading in self:
            x = y = 0.0
            if isinstance(reading, (OdometryReading, RangeReading)):
                x, y = reading.pose.x, reading.pose.y
            if isinstance(reading, RangeReading) and start is None:
                start = reading.pose
            xmin = min(xmin, x)
            xmax = max(xmax, x)
            ymin = y
            ymax = y
        return (start if start is not None else OrientedPoint()), (xmin, ymin, xmax, ymax)