"""npmship: resolve, gate and publish npm releases from CI."""

__version__ = "0.3.0"
