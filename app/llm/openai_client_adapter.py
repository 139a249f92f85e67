from typing import Any

import httpx
import openai

from app.llm.client_base import Attachment, BaseLLMClient
from app.llm.exceptions import ModelInvocationError, ModelNetworkError


class OpenAIClientAdapter(BaseLLMClient):
    """Chat completions against any OpenAI-compatible endpoint (Gemini included).

    Answers are constrained with a strict ``json_schema`` response format;
    documents travel as ``file`` content parts carrying their data URI.
    """

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

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
        request: dict[str, Any] = {
            "model": model,
            "temperature": temperature,
            "response_format": _structured_output(schema_name, json_schema),
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": _user_content(user_prompt, attachment)},
            ],
        }
        try:
            response = self._client.chat.completions.create(**request)
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ModelNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise ModelNetworkError(f"AI provider API error: {exc}") from exc

        return _first_message_text(response)


def _structured_output(schema_name: str, json_schema: dict[str, object]) -> dict[str, Any]:
    return {
        "type": "json_schema",
        "json_schema": {"name": schema_name, "strict": True, "schema": json_schema},
    }


def _user_content(user_prompt: str, attachment: Attachment | None) -> str | list[dict[str, Any]]:
    if attachment is None:
        return user_prompt
    return [
        {"type": "text", "text": user_prompt},
        {
            "type": "file",
            "file": {"filename": attachment.file_name, "file_data": attachment.data_uri},
        },
    ]


def _first_message_text(response: Any) -> str:
    if not response.choices:
        raise ModelInvocationError("AI returned no choices")
    content = response.choices[0].message.content
    if content is None:
        raise ModelInvocationError("AI returned empty response")
    return content
