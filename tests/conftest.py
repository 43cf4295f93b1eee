"""
Pytest configuration and shared fixtures for Record Redactor tests.

Every test injects its own environment mapping; nothing here touches
os.environ.
"""

import os
import sys

import pytest

# Add parent directory to path for server imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


@pytest.fixture
def patient_record():
    """The sample patient record used throughout the redaction tests."""
    return {
        "firstName": "Howard",
        "lastName": "Langston",
        "ssn": "123456789",
        "dob": "1947-07-30",
    }


@pytest.fixture
def app_env():
    """A complete, valid environment for the server's APP_SCHEMA."""
    return {
        "SERVICE_NAME": "redactor-test",
        "LOG_LEVEL": "DEBUG",
        "MCP_TRANSPORT": "stdio",
        "MAX_BATCH_SIZE": "3",
        "DEFAULT_REDACTION_SPEC": '{"ssn": true}',
    }


@pytest.fixture
def isolated_cwd(tmp_path, monkeypatch):
    """Run in an empty directory so a stray .env cannot leak into a test."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
