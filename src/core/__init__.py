"""Core: dominio, validación, caché y orquestación. No conoce HTTP ni CLI."""
