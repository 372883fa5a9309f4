"""Maraikka documentation server."""
