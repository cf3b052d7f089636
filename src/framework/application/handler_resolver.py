import re
from typing import Any, Dict


class HandlerResolver:
    """Resolves message handlers from a DI container by naming convention.

    GetPathwayQuery -> get_pathway_query_handler
    BulkSyncPathwayOptionsCommand -> bulk_sync_pathway_options_command_handler
    """

    def __init__(self, container: Any) -> None:
        """Initialize the resolver with container dependency.

        Args:
            container: Container instance for resolving handlers.
        """
        self.container = container
        self._providers_cache: Dict[type, Any] = {}

    def resolve(self, message: Any) -> Any:
        """Build a fresh handler instance for the given command or query."""
        message_type = type(message)

        # Cache provider lookups, handlers themselves are built per message
        provider = self._providers_cache.get(message_type)
        if provider is None:
            provider_name = self._camel_to_snake(f"{message_type.__name__}Handler")
            provider = getattr(self.container, provider_name)
            self._providers_cache[message_type] = provider

        return provider()

    @staticmethod
    def _camel_to_snake(name: str) -> str:
        """Convert CamelCase to snake_case."""
        s1 = re.sub('(.)([A-Z][a-z]+)', r'\1_\2', name)
        return re.sub('([a-z0-9])([A-Z])', r'\1_\2', s1).lower()
