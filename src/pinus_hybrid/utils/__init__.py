"""Logging, report and summary helpers."""
