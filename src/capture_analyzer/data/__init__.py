"""Packet records and ingestion."""
