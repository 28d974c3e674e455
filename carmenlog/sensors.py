"""Sensor descriptions, sensor readings and the configuration interface."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass
class OrientedPoint:
    """A planar pose: position plus heading in radians."""

    x: float = 0.0
    y: float = 0.0
    theta: float = 0.0


@dataclass
class Sensor:
    """A named sensor mounted on the robot."""

    name: str


@dataclass
class OdometrySensor(Sensor):
    """An odometry source; ``ideal`` marks ground-truth poses."""

    ideal: bool = False


@dataclass
class Beam:
    """One beam of a range sensor, relative to the sensor pose."""

    pose: OrientedPoint = field(default_factory=OrientedPoint)
    span: float = 0.0
    max_range: float = 0.0
    s: float = 0.0
    c: float = 1.0


@dataclass
class RangeSensor(Sensor):
    """A range sensor such as a laser scanner or a sonar ring."""

    pose: OrientedPoint = field(default_factory=OrientedPoint)
    beams: list[Beam] = field(default_factory=list)
    new_format: bool = False

    def update_beams_lookup(self) -> None:
        """Refresh the cached sine and cosine of every beam's heading."""
        for beam in self.beams:
            beam.s = math.sin(beam.pose.theta)
            beam.c = math.cos(beam.pose.theta)


SensorMap = dict[str, Sensor]


@dataclass
class SensorReading:
    """A time-stamped observation produced by a sensor."""

    sensor: Sensor
    time: float = 0.0


@dataclass
class OdometryReading(SensorReading):
    """Pose, speed and acceleration reported by an odometry sensor."""

    pose: OrientedPoint = field(default_factory=OrientedPoint)
    speed: OrientedPoint = field(default_factory=OrientedPoint)
    acceleration: OrientedPoint = field(default_factory=OrientedPoint)


@dataclass
class RangeReading(SensorReading):
    """The ranges measured by a range sensor at a robot pose."""

    readings: list[float] = field(default_factory=list)
    pose: OrientedPoint = field(default_factory=OrientedPoint)


class Configuration(ABC):
    """Something that can describe the robot's sensors."""

    @abstractmethod
    def compute_sensor_map(self) -> SensorMap:
        """Return the sensors keyed by name."""