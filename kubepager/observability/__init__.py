"""Logging and metrics for kubepager."""
