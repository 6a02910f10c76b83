"""goscope - declaration index and context search for Go source trees."""

__version__ = "0.1.0"
