"""
Property-based tests for error handling.

These tests verify that collaborator calls are bounded by their timeout and
that failures are mapped onto the calling stage's error type.
"""

import asyncio

import pytest
from hypothesis import given, settings, strategies as st

from propsearch.error_handling import (
    DownstreamSearchError,
    ErrorHandler,
    GeocodingFailure,
    SearchError,
    TimeoutConfig,
)


return_values = st.one_of(st.integers(), st.text(max_size=20), st.none())


@given(value=return_values)
@settings(max_examples=100, deadline=None)
def test_successful_operation_passes_result_through(value):
    """
    For any operation that completes inside its timeout, the handler returns
    its result unchanged.
    """
    handler = ErrorHandler(default_timeout_seconds=1.0)

    async def operation(x):
        return x

    assert asyncio.run(handler.run_with_timeout(operation, value)) == value


@given(message=st.text(min_size=1, max_size=30))
@settings(max_examples=50, deadline=None)
def test_failure_factory_wraps_original(message):
    """
    For any failing operation, the failure factory's exception is raised with
    the original as its cause.
    """
    handler = ErrorHandler()

    async def operation():
        raise ValueError(message)

    with pytest.raises(GeocodingFailure) as exc_info:
        asyncio.run(handler.run_with_timeout(operation, failure=lambda e: GeocodingFailure("x")))

    assert isinstance(exc_info.value.__cause__, ValueError)
    assert str(exc_info.value.__cause__) == message


@pytest.mark.asyncio
async def test_timeout_is_mapped():
    """Test that a hung call is cut off at the timeout."""
    handler = ErrorHandler()

    async def hang():
        await asyncio.sleep(10)

    with pytest.raises(GeocodingFailure) as exc_info:
        await handler.run_with_timeout(hang, timeout_seconds=0.05, failure=lambda e: GeocodingFailure("Dallas"))

    assert isinstance(exc_info.value.__cause__, asyncio.TimeoutError)


@pytest.mark.asyncio
async def test_without_factory_original_propagates():
    """Test that the original exception is re-raised when no factory is given."""
    handler = ErrorHandler()

    async def operation():
        raise KeyError("missing")

    with pytest.raises(KeyError):
        await handler.run_with_timeout(operation)


@pytest.mark.asyncio
async def test_passthrough_types_are_not_wrapped():
    """Test that passthrough exceptions skip the failure factory."""
    handler = ErrorHandler()

    async def operation():
        raise DownstreamSearchError("boom")

    with pytest.raises(DownstreamSearchError):
        await handler.run_with_timeout(
            operation,
            failure=lambda e: GeocodingFailure("x"),
            passthrough=(DownstreamSearchError,),
        )


@pytest.mark.asyncio
async def test_failures_are_logged(caplog):
    """Test that failures leave a warning in the log."""
    handler = ErrorHandler()

    async def geocode_call():
        raise OSError("connection reset")

    with caplog.at_level("WARNING"):
        with pytest.raises(OSError):
            await handler.run_with_timeout(geocode_call)

    assert "geocode_call" in caplog.text
    assert "connection reset" in caplog.text


def test_error_taxonomy():
    """Test error attributes and hierarchy."""
    failure = GeocodingFailure("Atlantis", status="ZERO_RESULTS")

    assert isinstance(failure, SearchError)
    assert failure.location == "Atlantis"
    assert failure.status == "ZERO_RESULTS"
    assert "Atlantis" in str(failure)
    assert issubclass(DownstreamSearchError, SearchError)


def test_timeout_config_defaults():
    """Test default timeouts."""
    config = TimeoutConfig()

    assert config.language_model_seconds == 10.0
    assert config.geocoding_seconds == 10.0
    assert config.signing_seconds == 5.0
