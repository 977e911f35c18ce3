"""fixturectl — load and unload test fixtures from the command line."""

__version__ = "0.4.0"
