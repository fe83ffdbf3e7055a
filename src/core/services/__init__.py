"""Servicios de aplicación (orquestación sobre interfaces del Core)."""
