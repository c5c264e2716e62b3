"""Tests for error taxonomy with error codes."""

from committer.exceptions import (
    CommitterError,
    CommitterInstantiationError,
    ConfigurationError,
    UnknownCommitterError,
)


def test_base_error_code():
    err = CommitterError("Test error")
    assert err.error_code == "ERR000"
    assert str(err) == "[ERR000] Test error"


def test_error_code_override():
    err = CommitterError("Custom", details={"k": "v"}, error_code="X999")
    assert str(err) == "[X999] Custom (k=v)"


def test_configuration_error_carries_original_error():
    cause = ValueError("bad value")
    err = ConfigurationError("Load failed", committer_type="A", original_error=cause)
    assert err.error_code == "CFG001"
    assert err.original_error is cause
    assert "committer_type=A" in str(err)
    assert "error_type=ValueError" in str(err)


def test_unknown_committer_error():
    err = UnknownCommitterError("Missing", available=["A", "B"])
    assert err.error_code == "CFG002"
    assert isinstance(err, ConfigurationError)
    assert "[CFG002] Committer type 'Missing' is not registered" in str(err)
    assert err.details["available"] == "A, B"


def test_instantiation_error_code():
    err = CommitterInstantiationError("Boom", committer_type="A")
    assert err.error_code == "CFG003"
    assert isinstance(err, CommitterError)
