"""Test package, so modules can import the shared doubles in tests/support.py."""
