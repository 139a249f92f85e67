from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Attachment:
    """A document sent to the model alongside the prompt, as a base64 data URI."""

    file_name: str
    data_uri: str


class BaseLLMClient(ABC):
    """Contract for provider-specific model clients."""

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
        schema_name: str,
        attachment: Attachment | None = None,
    ) -> str:
        """Return provider response as plain text.

        When ``attachment`` is given the model receives the document itself
        next to the user prompt.

        Raises:
            ModelNetworkError: on transport or provider API failures.
            ModelInvocationError: when the provider returns no usable content.
        """
