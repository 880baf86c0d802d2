"""Endpoint helpers for the thermostat's local HTTP API."""
