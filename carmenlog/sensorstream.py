"""Streams of sensor readings, read line by line or replayed from a log."""

from __future__ import annotations

from typing import Iterable, Iterator

from .sensorlog import SensorLog
from .sensors import (
    OdometryReading,
    OdometrySensor,
    OrientedPoint,
    RangeReading,
    RangeSensor,
    SensorMap,
    SensorReading,
)


class _Tokens:
    """Pulls whitespace-separated fields; missing or malformed numbers read as zero."""

    def __init__(self, tokens: Iterable[str]) -> None:
        self._tokens: Iterator[str] = iter(tokens)

    def word(self) -> str:
        return next(self._tokens, "")

    def number(self) -> float:
        try:
            return float(self.word())
        except ValueError:
            return 0.0

    def integer(self) -> int:
        try:
            return int(self.word())
        except ValueError:
            return 0

    def skip(self, count: int) -> None:
        for _ in range(count):
            self.word()


def _parse_odometry(fields: _Tokens, sensor: OdometrySensor) -> OdometryReading:
    pose = OrientedPoint(fields.number(), fields.number(), fields.number())
    speed_x = fields.number()
    speed_theta = fields.number()
    accel_x = fields.number()
    timestamp = fields.number()
    fields.word()
    fields.number()
    return OdometryReading(
        sensor,
        time=timestamp,
        pose=pose,
        speed=OrientedPoint(speed_x, 0.0, speed_theta),
        acceleration=OrientedPoint(accel_x, 0.0, 0.0),
    )


def _parse_range(fields: _Tokens, sensor: RangeSensor) -> RangeReading:
    if sensor.new_format:
        fields.skip(7)
    size = fields.integer()
    if size != len(sensor.beams):
        raise ValueError(
            f"{sensor.name} record has {size} readings, sensor has {len(sensor.beams)} beams"
        )
    readings = [fields.number() for _ in range(size)]
    if sensor.new_format:
        for _ in range(fields.integer()):
            fields.number()
    fields.skip(3)  # laser pose, unused
    pose = OrientedPoint(fields.number(), fields.number(), fields.number())
    if sensor.new_format:
        fields.skip(5)
    timestamp = fields.number()
    fields.word()
    fields.number()
    return RangeReading(sensor, time=timestamp, readings=readings, pose=pose)


def parse_reading(line: str, sensor_map: SensorMap) -> SensorReading | None:
    """Parse one log line; return None for blank lines and unknown sensors."""
    tokens = line.split()
    if not tokens:
        return None
    sensor = sensor_map.get(tokens[0])
    fields = _Tokens(tokens[1:])
    if isinstance(sensor, OdometrySensor):
        return _parse_odometry(fields, sensor)
    if isinstance(sensor, RangeSensor):
        return _parse_range(fields, sensor)
    return None


class InputSensorStream:
    """Readings parsed on demand from the lines of a text stream."""

    def __init__(self, sensor_map: SensorMap, stream: Iterable[str]) -> None:
        self.sensor_map = sensor_map
        self._lines: Iterator[str] = iter(stream)
        self._exhausted = False

    def read(self) -> SensorReading | None:
        """Parse the next line; None if it holds no reading or the input has ended."""
        if self._exhausted:
            return None
        line = next(self._lines, None)
        if line is None:
            self._exhausted = True
            return None
        return parse_reading(line, self.sensor_map)

    def rewind(self) -> bool:
        """A text stream cannot be rewound."""
        return False

    def __iter__(self) -> Iterator[SensorReading]:
        while self:
            reading = self.read()
            if reading is not None:
                yield reading

    def __bool__(self) -> bool:
        return not self._exhausted


class LogSensorStream:
    """Replays the readings of an already loaded sensor log."""

    def __init__(self, sensor_map: SensorMap, log: SensorLog) -> None:
        self.sensor_map = sensor_map
        self._log = log
        self._cursor = 0

    def read(self) -> SensorReading | None:
        """Return the next reading of the log, or None past its end."""
        if self._cursor >= len(self._log):
            return None
        reading = self._log[self._cursor]
        self._cursor += 1
        return reading

    def rewind(self) -> bool:
        """Go back to the first reading."""
        self._cursor = 0
        return True

    def __iter__(self) -> Iterator[SensorReading]:
        while self:
            reading = self.read()
            if reading is not None:
                yield reading

    def __bool__(self) -> bool:
        return self._cursor < len(self._log)