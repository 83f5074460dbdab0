"""Shared helpers for the LCAgents test-suite."""
