"""Logging, metrics and credential helpers."""
