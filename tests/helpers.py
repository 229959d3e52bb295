# tests/helpers.py

from __future__ import annotations

from config import JwtSettings

TEST_JWT = JwtSettings(
    issuer="taskmanager-tests",
    audience="taskmanager-clients",
    secret_key="test-secret-key-that-is-long-enough-for-hs256",
    expires_minutes=5,
)
