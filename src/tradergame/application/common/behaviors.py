"""
Pipeline behaviors (middleware) for the mediator.

Every command and query passes through these in registration order before
reaching its handler.
"""
import logging
from typing import Any

from tradergame.mediator import PipelineBehavior

logger = logging.getLogger(__name__)


class LoggingBehavior(PipelineBehavior):
    """
    Logs command/query failures.

    Success is not logged here; handlers log their own domain events.
    """

    async def handle(self, request: Any, next_handler):
        """
        Log request execution failures.

        Raises:
            Re-raises any exception from the handler after logging
        """
        request_name = type(request).__name__

        try:
            return await next_handler()
        except Exception as e:
            logger.error(f"Failed executing {request_name}: {e}", exc_info=True)
            raise


class ValidationBehavior(PipelineBehavior):
    """Calls request.validate() before the handler when the request defines it"""

    async def handle(self, request: Any, next_handler):
        validate = getattr(request, 'validate', None)
        if callable(validate):
            validate()

        return await next_handler()
