"""Convert PNG images into single-image PNG-in-ICO files."""

__version__ = "1.0.0"
