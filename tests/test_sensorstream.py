import io

import pytest

from carmenlog.sensorlog import SensorLog
from carmenlog.sensors import (
    Beam,
    OdometryReading,
    OdometrySensor,
    RangeReading,
    RangeSensor,
)
from carmenlog.sensorstream import InputSensorStream, LogSensorStream, parse_reading


@pytest.fixture
def sensor_map():
    return {
        "ODOM": OdometrySensor("ODOM"),
        "FLASER": RangeSensor("FLASER", beams=[Beam(), Beam()]),
        "ROBOTLASER1": RangeSensor("ROBOTLASER1", beams=[Beam()], new_format=True),
    }


ODOM_LINE = "ODOM 1 2 0.5 0.1 0.2 0.3 100.5 host 0.1"
LASER_LINE = "FLASER 2 1.0 2.0 0 0 0 3 4 0.1 55.5 host 0.2"
NEW_LINE = "ROBOTLASER1 0 -1.57 3.14 0.01 80 0.1 0 1 5.0 0 0 0 0 1 2 0.3 0 0 0 0 0 77.0 host 0"


def test_parse_odometry_line(sensor_map):
    reading = parse_reading(ODOM_LINE, sensor_map)
    assert isinstance(reading, OdometryReading)
    assert (reading.pose.x, reading.pose.y, reading.pose.theta) == (1.0, 2.0, 0.5)
    assert (reading.speed.x, reading.speed.y, reading.speed.theta) == (0.1, 0.0, 0.2)
    assert reading.acceleration.x == 0.3
    assert reading.time == 100.5


def test_parse_old_format_laser(sensor_map):
    reading = parse_reading(LASER_LINE, sensor_map)
    assert isinstance(reading, RangeReading)
    assert reading.readings == [1.0, 2.0]
    assert (reading.pose.x, reading.pose.y, reading.pose.theta) == (3.0, 4.0, 0.1)
    assert reading.time == 55.5


def test_parse_new_format_laser(sensor_map):
    reading = parse_reading(NEW_LINE, sensor_map)
    assert reading.readings == [5.0]
    assert (reading.pose.x, reading.pose.y, reading.pose.theta) == (1.0, 2.0, 0.3)
    assert reading.time == 77.0


def test_unknown_and_blank_lines(sensor_map):
    assert parse_reading("SONAR 1 2 3", sensor_map) is None
    assert parse_reading("   \n", sensor_map) is None


def test_size_mismatch_raises(sensor_map):
    with pytest.raises(ValueError):
        parse_reading("FLASER 3 1 2 3 0 0 0 0 0 0 1 h 0", sensor_map)


def test_input_stream_reads_all(sensor_map):
    text = io.StringIO("\n".join([ODOM_LINE, "PARAM x 1", LASER_LINE]) + "\n")
    stream = InputSensorStream(sensor_map, text)
    readings = list(stream)
    assert [type(r) for r in readings] == [OdometryReading, RangeReading]
    assert not stream
    assert stream.read() is None
    assert stream.rewind() is False


def test_log_stream_replays_and_rewinds(sensor_map):
    log = SensorLog(sensor_map).load([ODOM_LINE, LASER_LINE])
    stream = LogSensorStream(sensor_map, log)
    assert bool(stream)
    first = list(stream)
    assert first == list(log)
    assert not stream
    assert stream.read() is None
    assert stream.rewind() is True
    assert stream.read() is log[0]