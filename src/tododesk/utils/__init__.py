"""Utility helpers for tododesk."""
