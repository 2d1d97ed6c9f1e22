"""
Shared fixtures for unit tests.
"""

from __future__ import annotations

import os
import types
import uuid

import pytest

# The handler module configures Powertools at import time, which happens
# during collection, before any fixture runs.
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "true")
os.environ.setdefault("SERVICE_NAME", "certificate-checker-test")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "INFO")


@pytest.fixture(scope="session", autouse=True)
def _env_vars():
    """
    Ensures a deterministic environment for every test run.
    Overwrite *only* the variables needed by the handler.
    """
    original = os.environ.copy()
    os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "certificate-checker-test")
    os.environ.setdefault("POWERTOOLS_METRICS_NAMESPACE", "CertificateCheckerTest")
    yield
    os.environ.clear()
    os.environ.update(original)


def make_context(**overrides) -> types.SimpleNamespace:
    """A small stand-in for the LambdaContext object."""
    attrs = {
        "aws_request_id": "req-" + uuid.uuid4().hex,
        "function_name": "certificate-checker",
        "function_version": "$LATEST",
        "invoked_function_arn": "arn:aws:lambda:eu-west-1:000000000000:function:certificate-checker",
        "memory_limit_in_mb": 128,
        "log_group_name": "/aws/lambda/certificate-checker",
        "log_stream_name": "2026/10/18/[$LATEST]0123456789abcdef",
    }
    attrs.update(overrides)
    return types.SimpleNamespace(**attrs)


@pytest.fixture
def lambda_context() -> types.SimpleNamespace:
    return make_context()


@pytest.fixture
def context_factory():
    """Builds contexts with selected attributes overridden."""
    return make_context
