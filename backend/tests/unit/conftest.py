"""Unit test configuration.

Isolates unit tests from integration test setup.
Unit tests should not depend on app.py lifespan or external services
(scale hardware, MongoDB, identity endpoint).
"""
