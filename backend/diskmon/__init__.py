"""DiskMon — filesystem usage discovery and byte formatting."""

__version__ = "0.1.0"
