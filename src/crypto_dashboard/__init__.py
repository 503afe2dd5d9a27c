"""Crypto market dashboard: asset table, narrative heatmap, watchlists and refresh settings."""
