from scorebook.api.client import ScorebookClient
from scorebook.api.mapping import from_api, to_api

__all__ = ["ScorebookClient", "from_api", "to_api"]
