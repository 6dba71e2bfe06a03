from guide_api.clients.assistant_client import AssistantClient, AssistantClientError

__all__ = ["AssistantClient", "AssistantClientError"]
