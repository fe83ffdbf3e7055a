"""Capa de presentación en terminal (Typer + Rich)."""
