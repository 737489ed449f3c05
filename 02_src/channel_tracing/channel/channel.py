"""In-memory message channel with interceptor hooks."""

from typing import Awaitable, Callable, Protocol

from ..exceptions import MessageDeliveryError
from ..interceptor import IChannelInterceptor
from ..logging_config import get_logger
from ..models import AnonymousChannel, ChannelIdentity, Message, NamedChannel

logger = get_logger(__name__)


ChannelHandler = Callable[[Message], Awaitable[None]]


class IMessageChannel(Protocol):
    """A channel messages are sent to and handlers subscribe on."""

    @property
    def identity(self) -> ChannelIdentity:
        """Structured name of the channel, or its string form."""
        ...

    def subscribe(self, handler: ChannelHandler) -> None:
        """Subscribe a handler to the channel."""
        ...

    async def send(self, message: Message) -> bool:
        """Run interceptors and dispatch the message to every handler."""
        ...


class DirectChannel:
    """Dispatches each message to its handlers in the sender's task."""

    def __init__(
        self,
        name: str | None = None,
        interceptors: list[IChannelInterceptor] | None = None,
    ):
        self._name = name
        self._handlers: list[ChannelHandler] = []
        self._interceptors: list[IChannelInterceptor] = list(interceptors or [])

    @property
    def identity(self) -> ChannelIdentity:
        if self._name:
            return NamedChannel(name=self._name)
        return AnonymousChannel(label=str(self))

    def subscribe(self, handler: ChannelHandler) -> None:
        """Subscribe a handler to the channel."""
        self._handlers.append(handler)

    def add_interceptor(self, interceptor: IChannelInterceptor) -> None:
        """Append an interceptor; interceptors run in the order added."""
        self._interceptors.append(interceptor)

    async def send(self, message: Message) -> bool:
        """Run pre-send hooks, dispatch, then completion hooks in reverse order.

        Completion hooks run for every interceptor whose pre-send hook ran,
        whether or not dispatch succeeded. Dispatch failures are re-raised.
        """
        applied: list[IChannelInterceptor] = []
        sent = False
        try:
            for interceptor in self._interceptors:
                message = interceptor.pre_send(message, self)
                applied.append(interceptor)
            await self._dispatch(message)
            sent = True
        except BaseException as e:
            # Cancellation included: every opened scope must be closed.
            self._after_send_completion(message, applied, sent, e)
            raise
        self._after_send_completion(message, applied, sent, None)
        return sent

    async def _dispatch(self, message: Message) -> None:
        if not self._handlers:
            raise MessageDeliveryError(self.identity.resolve_name())

        for handler in list(self._handlers):
            for interceptor in self._interceptors:
                interceptor.before_handle(message, self, handler)
            try:
                await handler(message)
            except Exception as e:
                logger.error(
                    "Error in handler on channel %s: %s",
                    self.identity.resolve_name(),
                    e,
                )
                self._after_handled(message, handler, e)
                raise
            except BaseException as e:
                self._after_handled(message, handler, e)
                raise
            self._after_handled(message, handler, None)

    def _after_handled(
        self,
        message: Message,
        handler: ChannelHandler,
        error: BaseException | None,
    ) -> None:
        for interceptor in reversed(self._interceptors):
            interceptor.after_handled(message, self, handler, error)

    def _after_send_completion(
        self,
        message: Message,
        applied: list[IChannelInterceptor],
        sent: bool,
        error: BaseException | None,
    ) -> None:
        for interceptor in reversed(applied):
            interceptor.post_send(message, self, sent, error)
