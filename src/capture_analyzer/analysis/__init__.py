"""Analytical views derived from normalized packet records."""
