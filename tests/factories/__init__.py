"""Test factories: in-memory store models and shared fixtures."""
