"""
Simulator Tests

Tests for the core entities and the discrete-time driver.
"""
