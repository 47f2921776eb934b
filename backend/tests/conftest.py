"""Shared test configuration.

Loads backend/.env then backend/.env.test (override) so tests see the
same variables as a local run, with test-specific stores.
Unit tests in tests/unit/ keep their own isolated conftest.
"""

from pathlib import Path

from dotenv import load_dotenv

env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)

env_test_path = Path(__file__).parent.parent / ".env.test"
if env_test_path.exists():
    load_dotenv(env_test_path, override=True)
