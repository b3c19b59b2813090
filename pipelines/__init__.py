"""Dagster code location for the OSM import pipeline's tag transformation stage."""
