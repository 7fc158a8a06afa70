from abc import ABC, abstractmethod


class BaseAnalysisClient(ABC):
    """Contract for provider-specific generative model clients."""

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        top_p: float,
        max_tokens: int,
        user_prompt: str,
        json_schema: dict[str, object] | None,
    ) -> str:
        """Return the provider response as plain text.

        When `json_schema` is None the provider is not asked for structured
        output and the text may contain fences or prose around the JSON.
        """
