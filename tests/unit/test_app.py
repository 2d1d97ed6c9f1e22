# tests/unit/test_app.py

import json
import types
from unittest.mock import patch

import pytest

from certificate_checker import app


def _greeting_lines(out: str) -> list[str]:
    return [line for line in out.splitlines() if line.startswith("Hello ")]


def _emf_blobs(out: str) -> list[dict]:
    blobs = []
    for line in out.splitlines():
        try:
            parsed = json.loads(line)
        except json.JSONDecodeError:
            continue
        if isinstance(parsed, dict) and "_aws" in parsed:
            blobs.append(parsed)
    return blobs


def test_handler_greets_with_request_id(context_factory, capsys):
    result = app.handler({}, context_factory(aws_request_id="abc-123"))

    assert result is None
    assert _greeting_lines(capsys.readouterr().out) == ["Hello abc-123n"]


def test_handler_with_empty_request_id(context_factory, capsys):
    result = app.handler({}, context_factory(aws_request_id=""))

    assert result is None
    assert _greeting_lines(capsys.readouterr().out) == ["Hello n"]


class _BrokenMetadataContext:
    """A context whose metadata access fails inside the runtime object."""

    aws_request_id = "abc-123"

    @property
    def function_name(self):
        raise RuntimeError("runtime context broken")


class _BrokenRequestIdContext:
    function_name = "certificate-checker"

    @property
    def aws_request_id(self):
        raise KeyError("aws_request_id")


@pytest.mark.parametrize(
    "context",
    [
        None,
        types.SimpleNamespace(),
        types.SimpleNamespace(aws_request_id=None),
        types.SimpleNamespace(aws_request_id=12345),
        _BrokenRequestIdContext(),
    ],
    ids=["absent", "no-attributes", "none-id", "wrong-type-id", "raising-id"],
)
def test_handler_degrades_when_request_id_unreadable(context, capsys):
    """The handler never fails; it prints an empty greeting instead."""
    result = app.handler({"any": "event"}, context)

    assert result is None
    assert _greeting_lines(capsys.readouterr().out) == ["Hello n"]


@pytest.mark.parametrize(
    "context",
    [
        types.SimpleNamespace(aws_request_id="abc-123", memory_limit_in_mb="lots"),
        types.SimpleNamespace(aws_request_id="abc-123", function_name=123),
        types.SimpleNamespace(
            aws_request_id="abc-123", invoked_function_arn=["arn"], log_group_name=7
        ),
        _BrokenMetadataContext(),
    ],
    ids=["bad-memory", "bad-function-name", "several-bad-fields", "raising-metadata"],
)
def test_handler_keeps_request_id_when_metadata_unreadable(context, capsys):
    result = app.handler({}, context)

    assert result is None
    assert _greeting_lines(capsys.readouterr().out) == ["Hello abc-123n"]


def test_handler_ignores_event_contents(lambda_context, capsys):
    for event in ({}, {"Records": []}, {"detail": {"x": 1}}):
        assert app.handler(event, lambda_context) is None

    expected = f"Hello {lambda_context.aws_request_id}n"
    assert _greeting_lines(capsys.readouterr().out) == [expected] * 3


def test_handler_emits_greeting_metric(lambda_context, capsys):
    app.handler({}, lambda_context)

    blobs = _emf_blobs(capsys.readouterr().out)
    assert len(blobs) == 1
    blob = blobs[0]
    assert blob["GreetingsEmitted"] == [1.0]
    assert blob["environment"] == app.CONFIG.environment
    namespaces = {m["Namespace"] for m in blob["_aws"]["CloudWatchMetrics"]}
    assert namespaces == {app.CONFIG.metrics_namespace}


def test_log_keys_are_replaced_each_invocation(context_factory, capsys):
    with patch.object(app, "logger") as mock_logger:
        app.handler({}, context_factory(aws_request_id="first-id"))
        app.handler({}, None)

    first, second = (c.kwargs for c in mock_logger.append_keys.call_args_list)
    assert first["function_request_id"] == "first-id"
    assert first["function_name"] == "certificate-checker"
    assert second == {
        "function_name": None,
        "function_memory_size": None,
        "function_arn": None,
        "function_request_id": "",
    }


def test_context_error_is_logged_not_raised(capsys):
    with patch("certificate_checker.core.logger") as mock_core_logger:
        app.handler({}, types.SimpleNamespace(aws_request_id=object()))

    mock_core_logger.warning.assert_called_once()
    error = mock_core_logger.warning.call_args.kwargs["extra"]["error"]
    assert error["error_code"] == "INVALID_INVOCATION_CONTEXT"
    assert _greeting_lines(capsys.readouterr().out) == ["Hello n"]


def test_entry_shim_exposes_packaged_handler():
    import app as entry

    assert entry.handler is app.handler
