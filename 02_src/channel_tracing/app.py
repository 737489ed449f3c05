"""Application bootstrap and lifecycle management."""

from typing import Protocol

import opentracing
from opentracing.mocktracer import MockTracer
from opentracing.scope_managers.contextvars import ContextVarsScopeManager

from .bus import MessageBus
from .channel import DirectChannel
from .config import TracingSettings
from .endpoints import Receiver, Sender
from .interceptor import TracingChannelInterceptor
from .logging_config import get_logger
from .models import SpanRecord

logger = get_logger(__name__)

OUTPUT_CHANNEL = "output"
INPUT_CHANNEL = "input"


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Wire channels, bus and endpoints."""
        ...

    async def stop(self) -> None:
        """Shutdown."""
        ...

    async def reset(self) -> None:
        """Clear finished spans and received messages."""
        ...

    def finished_spans(self) -> list[SpanRecord]:
        """Spans finished since the last reset."""
        ...

    @property
    def sender(self) -> Sender:
        """Sender bound to the output channel."""
        ...


class Application:
    """Output channel -> bus -> input channel, traced by one interceptor."""

    def __init__(
        self,
        tracer: opentracing.Tracer | None = None,
        settings: TracingSettings | None = None,
    ):
        self._settings = settings or TracingSettings.from_env()
        # Channels run inside asyncio tasks, so scopes follow contextvars
        self._tracer = tracer or MockTracer(scope_manager=ContextVarsScopeManager())

        # Components (will be initialized in start())
        self._interceptor: TracingChannelInterceptor | None = None
        self._bus: MessageBus | None = None
        self._output: DirectChannel | None = None
        self._input: DirectChannel | None = None
        self._sender: Sender | None = None
        self._receiver: Receiver | None = None

    async def start(self) -> None:
        """Wire components in dependency order."""
        logger.info("Starting application")

        # 1. Interceptor (depends on tracer)
        self._interceptor = TracingChannelInterceptor(self._tracer, self._settings)

        # 2. Bus (no dependencies)
        self._bus = MessageBus()

        # 3. Channels (depend on interceptor), bound through the bus
        self._output = DirectChannel(OUTPUT_CHANNEL, [self._interceptor])
        self._input = DirectChannel(INPUT_CHANNEL, [self._interceptor])
        self._bus.bind_producer(self._settings.destination, self._output)
        self._bus.bind_consumer(self._settings.destination, self._input)
        logger.info("Channels bound to destination %s", self._settings.destination)

        # 4. Endpoints
        self._receiver = Receiver()
        self._input.subscribe(self._receiver.handle)
        self._sender = Sender(self._output)
        logger.info("All components initialized successfully")

    async def stop(self) -> None:
        """Shutdown (in-memory components hold no resources)."""
        logger.info("Stopping application")

    async def reset(self) -> None:
        """Clear finished spans and received messages."""
        reset_tracer = getattr(self._tracer, "reset", None)
        if reset_tracer is not None:
            reset_tracer()
        if self._receiver:
            self._receiver.clear()
        logger.info("Reset complete")

    def finished_spans(self) -> list[SpanRecord]:
        """Spans finished since the last reset (recording tracers only)."""
        finished = getattr(self._tracer, "finished_spans", None)
        if finished is None:
            return []
        return [SpanRecord.from_span(span) for span in finished()]

    @property
    def tracer(self) -> opentracing.Tracer:
        return self._tracer

    @property
    def sender(self) -> Sender:
        """Get sender instance."""
        if not self._sender:
            raise RuntimeError("Application not started")
        return self._sender

    @property
    def receiver(self) -> Receiver:
        """Get receiver instance."""
        if not self._receiver:
            raise RuntimeError("Application not started")
        return self._receiver

    @property
    def input_channel(self) -> DirectChannel:
        """Get input channel instance."""
        if not self._input:
            raise RuntimeError("Application not started")
        return self._input
