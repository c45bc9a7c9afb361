"""Offline reader for exported spreadsheet workbooks."""
