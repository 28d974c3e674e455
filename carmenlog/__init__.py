"""Carmen-style sensor log parsing, log conversion commands and particle filter utilities."""

__version__ = "0.1.0"

__all__ = [
    "carmen",
    "logplot",
    "particlefilter",
    "rangebearing",
    "rdk2carmen",
    "scanstudio",
    "sensorlog",
    "sensors",
    "sensorstream",
]