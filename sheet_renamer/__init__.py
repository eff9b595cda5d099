"""Rename Drive files from a spreadsheet row when its trigger cell is set to "Yes"."""

__version__ = "0.1.0"
