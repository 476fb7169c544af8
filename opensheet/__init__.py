"""Spreadsheet engine: cells, sheets, workbooks, dependency tracking, number
formats, auto fill, pivot tables, data validation and undo commands."""

__version__ = "1.0.0"