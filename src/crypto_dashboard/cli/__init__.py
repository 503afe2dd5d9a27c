"""Command-line helpers for the dashboard API."""
