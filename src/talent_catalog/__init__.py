"""Talent catalog: browser catalog and admin editor for casting profiles kept in a spreadsheet."""

__version__ = "0.1.0"
