"""Integration tests for the producer -> bus -> consumer flow."""

import pytest
from opentracing import Format
from opentracing.ext import tags

from channel_tracing.app import Application
from channel_tracing.interceptor import MESSAGE_CONSUMED, MESSAGE_SENT_FROM_CLIENT
from channel_tracing.models import Message
from channel_tracing.propagation import encode_key


def get_span_by_operation(app: Application, operation_name: str):
    for record in app.finished_spans():
        if record.operation_name == operation_name:
            return record
    raise AssertionError(f"Span for operation '{operation_name}' doesn't exist")


@pytest.mark.asyncio
async def test_flow_from_source_to_sink(application: Application, settings):
    """Test that a send produces a linked producer/consumer span pair."""
    await application.sender.send("Ping")

    assert len(application.receiver.received_messages) == 1
    assert len(application.finished_spans()) == 2

    output_span = get_span_by_operation(application, "send:output")
    assert output_span.parent_id is None
    assert output_span.tags == {
        tags.SPAN_KIND: tags.SPAN_KIND_PRODUCER,
        tags.COMPONENT: settings.component_name,
        tags.MESSAGE_BUS_DESTINATION: "output",
    }

    input_span = get_span_by_operation(application, "receive:input")
    assert input_span.parent_id == output_span.span_id
    assert input_span.trace_id == output_span.trace_id
    assert input_span.tags == {
        tags.SPAN_KIND: tags.SPAN_KIND_CONSUMER,
        tags.COMPONENT: settings.component_name,
        tags.MESSAGE_BUS_DESTINATION: "input",
    }

    assert output_span.start_time <= input_span.start_time


@pytest.mark.asyncio
async def test_received_message_markers(application: Application):
    """Test the markers on the message handed to the consumer."""
    sent = await application.sender.send("Ping", {"count": 1})

    (received,) = application.receiver.received_messages
    assert received.payload == "Ping"
    assert received.headers["count"] == 1
    assert received.headers["id"] == sent.headers["id"]
    assert received.headers[MESSAGE_CONSUMED] is True
    assert MESSAGE_SENT_FROM_CLIENT not in received.headers


@pytest.mark.asyncio
async def test_sender_returns_message_before_interception(application: Application):
    """Test that the sender hands back its own copy without trace headers."""
    sent = await application.sender.send("Ping", {"count": 1})

    assert set(sent.headers) == {"id", "timestamp", "count"}
    (received,) = application.receiver.received_messages
    assert len(received.headers) > len(sent.headers)


@pytest.mark.asyncio
async def test_flow_from_external_producer_to_sink(application: Application):
    """Test that context injected outside the channels parents the send span."""
    tracer = application.tracer
    external = tracer.start_span("jms-send")
    carrier = {}
    tracer.inject(external.context, Format.TEXT_MAP, carrier)
    external.finish()

    headers = {encode_key(key): value for key, value in carrier.items()}
    await application.input_channel.send(Message.create("Ping", headers))

    assert len(application.receiver.received_messages) == 1
    assert len(application.finished_spans()) == 2

    jms_span = get_span_by_operation(application, "jms-send")
    assert jms_span.parent_id is None

    input_span = get_span_by_operation(application, "send:input")
    assert input_span.parent_id == jms_span.span_id
    assert input_span.tags[tags.SPAN_KIND] == tags.SPAN_KIND_PRODUCER
    assert input_span.tags[tags.MESSAGE_BUS_DESTINATION] == "input"
    assert len(input_span.tags) == 3


@pytest.mark.asyncio
async def test_consumer_failure_tags_consumer_span(application: Application):
    """Test that a failing consumer handler marks only the consumer span."""

    async def failing_handler(msg: Message):
        raise RuntimeError("Test error")

    application.input_channel.subscribe(failing_handler)

    await application.sender.send("Ping")

    output_span = get_span_by_operation(application, "send:output")
    input_span = get_span_by_operation(application, "receive:input")
    assert tags.ERROR not in output_span.tags
    assert input_span.tags[tags.ERROR] is True
    assert application.tracer.active_span is None


@pytest.mark.asyncio
async def test_sequential_sends_are_separate_traces(application: Application):
    """Test that each send opens and closes its own pair of spans."""
    await application.sender.send("one")
    await application.sender.send("two")

    records = application.finished_spans()
    assert len(records) == 4
    producers = [r for r in records if r.operation_name == "send:output"]
    assert len(producers) == 2
    assert producers[0].trace_id != producers[1].trace_id
    assert all(r.parent_id is None for r in producers)
