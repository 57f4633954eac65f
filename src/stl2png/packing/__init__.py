"""Trailer format core: name normalization, size measurement, encoding."""
