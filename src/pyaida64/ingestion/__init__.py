"""Ingestion layer.

Converts raw telemetry bodies into snapshots for the state store.
"""
