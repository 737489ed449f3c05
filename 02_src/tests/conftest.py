"""Pytest configuration and fixtures."""

import sys
from pathlib import Path
from unittest.mock import Mock

import pytest
import pytest_asyncio
from opentracing.mocktracer import MockTracer

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture
def settings():
    """Default tracing settings."""
    from channel_tracing.config import TracingSettings

    return TracingSettings()


@pytest.fixture
def tracer():
    """Recording tracer with the default thread-local scope manager."""
    return MockTracer()


@pytest.fixture
def interceptor(tracer, settings):
    """Create TracingChannelInterceptor over the recording tracer."""
    from channel_tracing.interceptor import TracingChannelInterceptor

    return TracingChannelInterceptor(tracer, settings)


@pytest.fixture
def mock_tracer():
    """Create a Mock tracer whose active span/scope start out empty."""
    span = Mock()
    scope = Mock()
    scope.span = span

    tr = Mock()
    tr.start_active_span.return_value = scope
    tr.extract.return_value = None
    tr.active_span = None
    tr.scope_manager.active = None
    return tr


@pytest.fixture
def mock_interceptor(mock_tracer, settings):
    """Create TracingChannelInterceptor over the Mock tracer."""
    from channel_tracing.interceptor import TracingChannelInterceptor

    return TracingChannelInterceptor(mock_tracer, settings)


@pytest.fixture
def simple_message():
    """A message with a string payload and no custom headers."""
    from channel_tracing.models import Message

    return Message.create("test")


@pytest_asyncio.fixture
async def application():
    """Create and start an Application with its default tracer."""
    from channel_tracing.app import Application
    from channel_tracing.config import TracingSettings

    app = Application(settings=TracingSettings(destination="messages"))
    await app.start()
    yield app
    await app.stop()
