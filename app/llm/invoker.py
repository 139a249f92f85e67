"""Single structured call to the hosted model."""

import json
from pathlib import Path
from typing import Any

from app.llm.client_base import Attachment, BaseLLMClient
from app.llm.exceptions import ModelInvocationError
from app.llm.prompt_loader import load_prompt_template, render_prompt
from app.logging.logger import Log
from app.schema.models import Schema
from app.schema.validator import validate


class ModelInvoker:
    """Renders a prompt template, calls the model and validates its answer.

    No retries are attempted here; provider errors and schema mismatches
    propagate to the caller unchanged.
    """

    def __init__(
        self,
        *,
        client: BaseLLMClient,
        model: str,
        temperature: float = 0.0,
        system_prompt: str = "",
        prompt_dir: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        self._system_prompt = system_prompt
        self._prompt_dir = prompt_dir

    def invoke(
        self,
        template_name: str,
        variables: dict[str, object],
        output_schema: Schema,
        attachment: Attachment | None = None,
    ) -> dict[str, Any]:
        """Run one templated model call and return the validated output.

        ``attachment`` is forwarded to the client so the model can read the
        document itself.

        Raises:
            PromptTemplateError: if the template is missing or a variable is omitted.
            ModelInvocationError: on provider faults or unparseable responses.
            SchemaValidationError: if the response does not match output_schema.
        """
        template = load_prompt_template(template_name, self._prompt_dir)
        prompt = render_prompt(template, variables)
        Log.debug(f"Prompt '{template_name}':\n{prompt}")

        raw_response = self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt=self._system_prompt,
            user_prompt=prompt,
            json_schema=output_schema.to_json_schema(),
            schema_name=output_schema.name,
            attachment=attachment,
        )
        Log.debug(f"AI raw response for '{template_name}':\n{raw_response}")

        return validate(self._parse_json(raw_response), output_schema)

    @staticmethod
    def _parse_json(raw: str) -> dict[str, object]:
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()
            if lines and lines[0].startswith("```"):
                lines = lines[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise ModelInvocationError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise ModelInvocationError("JSON response must be an object")
        return parsed
