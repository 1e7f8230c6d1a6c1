"""Clipbin: short-lived text clip sharing service."""
