"""Adaptadores concretos (HTTP, exportación) de las interfaces del Core."""
