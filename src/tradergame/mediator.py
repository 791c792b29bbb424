"""
Request mediator for the command/query side of the game engine.

Commands (start production, advance a tick) and queries (game state,
facility listings) are frozen dataclasses deriving from Request. Each request
type is routed to exactly one handler, passing through the registered
pipeline behaviors on the way.
"""
from abc import ABC, abstractmethod
from typing import TypeVar, Generic, Any

TRequest = TypeVar('TRequest')
TResponse = TypeVar('TResponse')


class Request(Generic[TResponse], ABC):
    """
    Base class for all commands and queries.

    The generic parameter names the response type, e.g.

        @dataclass(frozen=True)
        class GetFacilityQuery(Request[Facility]):
            facility_id: str
    """
    pass


class RequestHandler(Generic[TRequest, TResponse], ABC):
    """Handles a single request type through an async handle() method."""

    @abstractmethod
    async def handle(self, request: TRequest) -> TResponse:
        """
        Handle the request and return a response.

        Args:
            request: The request to handle

        Returns:
            The response of type TResponse
        """
        pass


class PipelineBehavior(ABC):
    """
    Middleware wrapped around every handler invocation.

    A behavior receives the request and an awaitable-producing callable for
    the rest of the pipeline. It may inspect the request, call next_handler,
    and observe the response or the exception.
    """

    @abstractmethod
    async def handle(self, request: Any, next_handler):
        pass


class Mediator:
    """
    Routes requests through the behavior pipeline to their handlers.

    Handlers are registered as factories so that each dispatch gets a fresh
    handler bound to the current container singletons.
    """

    def __init__(self):
        self._handlers = {}
        self._behaviors = []

    def register_handler(self, request_type: type, handler_factory):
        """
        Register a handler factory for a request type.

        Args:
            request_type: The request class to handle
            handler_factory: Zero-argument callable returning a handler
        """
        self._handlers[request_type] = handler_factory

    def register_behavior(self, behavior: PipelineBehavior):
        """Append a behavior. Behaviors run in registration order."""
        self._behaviors.append(behavior)

    async def send_async(self, request: Request[TResponse]) -> TResponse:
        """
        Dispatch a request to its handler.

        Args:
            request: The request to send

        Returns:
            The response from the handler

        Raises:
            ValueError: If no handler is registered for the request type
        """
        request_type = type(request)

        if request_type not in self._handlers:
            raise ValueError(f"No handler registered for {request_type.__name__}")

        async def final_handler():
            handler = self._handlers[request_type]()
            return await handler.handle(request)

        # Wrap in reverse so the first registered behavior is outermost
        pipeline = final_handler
        for behavior in reversed(self._behaviors):
            next_pipeline = pipeline
            pipeline = lambda b=behavior, n=next_pipeline: b.handle(request, n)

        return await pipeline()
