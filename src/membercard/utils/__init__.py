"""Utility helpers for the member card client."""
