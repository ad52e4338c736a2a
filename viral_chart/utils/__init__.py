"""Utility helpers for the viral chart service."""
