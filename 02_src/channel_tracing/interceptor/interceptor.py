"""Channel interceptor that links producer and consumer spans."""

from typing import Any, Callable, Protocol

import opentracing
from opentracing import Format
from opentracing.ext import tags

from ..config import TracingSettings
from ..logging_config import get_logger
from ..models import Message, channel_identity
from ..propagation import MessageTextMap, TextMapExtractAdapter
from .headers import MESSAGE_CONSUMED, MESSAGE_SENT_FROM_CLIENT

logger = get_logger(__name__)

MessageHandler = Callable[[Message], Any]


class IChannelInterceptor(Protocol):
    """Hooks a channel calls around sending and handling a message."""

    def pre_send(self, message: Message, channel: Any) -> Message:
        """Called before the message is handed to the channel's dispatcher."""
        ...

    def post_send(
        self,
        message: Message,
        channel: Any,
        sent: bool,
        error: BaseException | None,
    ) -> None:
        """Called once the send attempt completed, successfully or not."""
        ...

    def before_handle(
        self, message: Message, channel: Any, handler: MessageHandler
    ) -> None:
        """Called before a subscribed handler receives the message."""
        ...

    def after_handled(
        self,
        message: Message,
        channel: Any,
        handler: MessageHandler,
        error: BaseException | None,
    ) -> None:
        """Called after a subscribed handler returned or raised."""
        ...


class TracingChannelInterceptor:
    """Opens a producer or consumer span per message and closes it on completion.

    The active scope lives in the tracer's scope manager; use a scope manager
    that follows the way the channel hands work around (thread-local for
    threads, contextvars for asyncio tasks).
    """

    def __init__(
        self,
        tracer: opentracing.Tracer | None = None,
        settings: TracingSettings | None = None,
    ):
        self._tracer = tracer if tracer is not None else opentracing.global_tracer()
        self._settings = settings or TracingSettings()

    @property
    def tracer(self) -> opentracing.Tracer:
        return self._tracer

    def pre_send(self, message: Message, channel: Any) -> Message:
        """Start a consumer span for traced messages, a producer span otherwise."""
        channel_name = channel_identity(channel).resolve_name()
        is_consumer = MESSAGE_SENT_FROM_CLIENT in message.headers
        extracted = self._extract(message)

        span_tags = {
            tags.SPAN_KIND: tags.SPAN_KIND_CONSUMER if is_consumer else tags.SPAN_KIND_PRODUCER,
            tags.COMPONENT: self._settings.component_name,
            tags.MESSAGE_BUS_DESTINATION: channel_name,
        }

        if is_consumer:
            references = None
            if extracted is not None:
                references = [opentracing.follows_from(extracted)]
            scope = self._tracer.start_active_span(
                f"receive:{channel_name}",
                references=references,
                tags=span_tags,
                finish_on_close=True,
            )
        else:
            # No active span: link to whatever an external producer injected
            child_of = extracted if self._tracer.active_span is None else None
            scope = self._tracer.start_active_span(
                f"send:{channel_name}",
                child_of=child_of,
                tags=span_tags,
                finish_on_close=True,
            )

        logger.debug(
            "Opened messaging span",
            extra={"context": {"channel": channel_name, "span_kind": span_tags[tags.SPAN_KIND]}},
        )

        carrier = MessageTextMap(message, token=self._settings.dash_token)
        self._tracer.inject(scope.span.context, Format.TEXT_MAP, carrier)
        traced = carrier.get_message()

        if is_consumer:
            return traced.without_headers(MESSAGE_SENT_FROM_CLIENT).with_headers(
                {MESSAGE_CONSUMED: True}
            )
        return traced.with_headers({MESSAGE_SENT_FROM_CLIENT: True})

    def post_send(
        self,
        message: Message | None,
        channel: Any,
        sent: bool,
        error: BaseException | None,
    ) -> None:
        """Tag a failure on the active span and close its scope."""
        scope = self._tracer.scope_manager.active
        if scope is None:
            return

        logger.debug(
            "Completed sending, closing messaging span scope",
            extra={"context": {"role": self._completion_role(message), "sent": sent}},
        )
        if error is not None:
            scope.span.set_tag(tags.ERROR, True)
        scope.close()

    def before_handle(
        self, message: Message | None, channel: Any, handler: MessageHandler | None
    ) -> None:
        span = self._tracer.active_span
        logger.debug("Handling message under span %s", span)

    def after_handled(
        self,
        message: Message | None,
        channel: Any,
        handler: MessageHandler | None,
        error: BaseException | None,
    ) -> None:
        span = self._tracer.active_span
        logger.debug("Handled message under span %s", span)
        if span is not None and error is not None:
            span.set_tag(tags.ERROR, True)

    def _extract(self, message: Message) -> opentracing.SpanContext | None:
        carrier = TextMapExtractAdapter(message.headers, token=self._settings.dash_token)
        try:
            return self._tracer.extract(Format.TEXT_MAP, carrier)
        except (
            opentracing.InvalidCarrierException,
            opentracing.SpanContextCorruptedException,
        ) as e:
            logger.debug("No usable span context in message headers: %s", e)
            return None

    @staticmethod
    def _completion_role(message: Message | None) -> str:
        # "consumed" wins when both markers are present
        if message is None:
            return "unknown"
        if message.headers.get(MESSAGE_CONSUMED):
            return "consumer"
        if message.headers.get(MESSAGE_SENT_FROM_CLIENT):
            return "producer"
        return "unknown"
