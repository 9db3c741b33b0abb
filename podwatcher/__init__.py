"""podwatcher: stream every pod change containing a marker string as YAML."""

__version__ = "0.1.0"
