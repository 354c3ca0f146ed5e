import logging

logger = logging.getLogger(__name__)


class QueryBus:
    def __init__(self):
        self.handlers = {}  # query type -> handler bound to one election

    def register_handler(self, query_type, handler):
        """
        Binds a handler to a query type, replacing any earlier binding.
        :param query_type: The query class (e.g., TopCandidateQuery).
        :param handler: Object exposing ``handle(query)``.
        """
        self.handlers[query_type] = handler

    def handle(self, query):
        """
        Runs the handler registered for ``type(query)`` and returns its answer.
        :raises ValueError: when nothing is registered for the query type.
        """
        query_type = type(query)
        handler = self.handlers.get(query_type)
        if handler is None:
            raise ValueError(f"No handler registered for query type: {query_type.__name__}")
        logger.debug("Dispatching %s", query_type.__name__)
        return handler.handle(query)
