"""Command modules for the tododesk CLI."""
