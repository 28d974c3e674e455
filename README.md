# carmenlog

Tools for reading robot sensor logs in the Carmen text format and for
running small particle filters.

The package reads the configuration part of a log: `PARAM` lines, plus the
`FLASER`, `RLASER`, `ROBOTLASER1` and `ROBOTLASER2` records, from which it
takes the number of laser beams. From these it builds a sensor map with
odometry (`ODOM`), true position (`TRUEPOS`), sonar (`SONAR`) and front and
rear laser range sensors, each with its beam geometry. With that map it
parses odometry and range readings, either all at once into a log or one
line at a time from a stream.

## Installation

```
pip install .
```

Install with `pip install .[test]` to run the test suite with `pytest`.

## Reading a log

```python
from carmenlog.carmen import CarmenConfiguration
from carmenlog.sensorlog import SensorLog

with open("run.log") as stream:
    config = CarmenConfiguration().load(stream)
sensor_map = config.compute_sensor_map()

with open("run.log") as stream:
    log = SensorLog(sensor_map).load(stream)

for reading in log:
    print(reading)
```

`CarmenConfiguration` is a dictionary from parameter name to its list of
values. `SensorLog` is a list of `OdometryReading` and `RangeReading`
objects (from `carmenlog.sensors`), in file order. A range record whose
number of readings does not match its sensor's beams raises `ValueError`.

`SensorLog.bounding_box()` returns a pair: the pose of the first range
reading, and a tuple `(xmin, ymin, xmax, ymax)`. The x bounds span all
odometry and range poses; both y bounds are taken from the last reading.

`parse_odometry` and `parse_range` in `carmenlog.sensorlog` parse the fields
of a single record that follow the sensor name.

To process a log line by line, use `carmenlog.sensorstream.InputSensorStream`
over an open file, or `carmenlog.sensorstream.LogSensorStream` over a log
already loaded. Both have `read()` and `rewind()` and can be iterated;
only `LogSensorStream` can rewind. `parse_reading` parses a single line
against a sensor map and returns `None` for blank lines and unknown sensors.

## Particle filter helpers

`carmenlog.particlefilter` holds the building blocks of a sampling
importance resampling filter:

- `neff` — the effective number of particles for a set of weights;
- `normalize`, `normalize_weights`, `to_normal_form`, `to_log_form` —
  weight conversions between raw and log form;
- `resample`, `repeat_indexes`, `scatter_indexes` — systematic resampling
  of particle indexes and building the next generation from them;
- `rle` — run-length encoding of an index sequence as `(value, count)` pairs;
- `UniformResampler`, `Evolver`, `AuxiliaryEvolver` — resampling and
  evolution steps over whole particle sets.

A particle's weight is its `weight` attribute, or the value itself when it
has none. Random draws come from the `random` module unless an `rng` object
with a `random()` method is given.

`carmenlog.rangebearing` shows them at work: point particles located from
range measurements to three fixed observers (`PointParticle`,
`RandomWalkModel`, `RangeLikelihoodModel`, `sir_step`).

## Commands

Print gnuplot commands that plot every third laser scan of a log, keeping
ranges up to 2 m, one GIF frame (`frame-00000.gif`, ...) per scan:

```
carmen-log-plot run.log | gnuplot
```

Print the laser scans of a log with ranges and positions converted from
millimetres to metres, to a file or to standard output:

```
rdk2carmen input.log output.log
rdk2carmen input.log
```

Convert a ScanStudio scan file (`RobotPos:`, `NumPoints:` and `DATA`
blocks, in millimetres) into `FLASER` lines:

```
scanstudio2carmen scans.txt run.log
```

Run the range-based localisation demo. Each line read from standard input
advances the filter by one step, writes the particles to `sir.dat` and prints
a gnuplot command to show them. Options: `--particles` (default 1000),
`--seed` and `--output` (default `sir.dat`):

```
carmen-range-bearing --seed 1
```

## What it does not do

The package reads and converts logs and provides particle filter building
blocks. It has no scan matcher, no occupancy-grid mapping and no map or
particle viewer, and it writes no images itself: `carmen-log-plot` only
prints commands for gnuplot to render.