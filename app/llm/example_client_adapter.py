"""Example model client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseLLMClient and register the provider in ModelInvokerFactory.
"""

import json
from typing import ClassVar

from app.llm.client_base import Attachment, BaseLLMClient
from app.llm.exceptions import ModelInvocationError


class ExampleClientAdapter(BaseLLMClient):
    """Offline adapter that answers each schema with a canned JSON object.

    No network calls. Useful for local demos and tests; pass ``responses``
    to override the answer for individual schemas.
    """

    DEFAULT_RESPONSES: ClassVar[dict[str, dict[str, object]]] = {
        "classification": {"format": "Email", "intent": "Complaint"},
        "email_extraction": {
            "sender": "customer@example.com",
            "subject": "Damaged delivery",
            "sender_intent": "Complaint about a damaged order",
            "key_entities": ["order 1042"],
            "summary": "The customer reports that order 1042 arrived damaged.",
        },
        "pdf_extraction": {
            "document_title": "Invoice",
            "issuer": "Example Supplies Ltd",
            "sender_intent": "Request for payment",
            "key_entities": ["INV-001"],
            "summary": "Invoice INV-001 awaiting payment.",
        },
        "routing": {"actionTaken": "create_ticket", "details": "Example ticket"},
    }

    def __init__(self, responses: dict[str, dict[str, object]] | None = None) -> None:
        self._responses = {**self.DEFAULT_RESPONSES, **(responses or {})}
        self.received_attachments: list[Attachment] = []

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
        _ = model, temperature, system_prompt, user_prompt, json_schema
        if attachment is not None:
            self.received_attachments.append(attachment)
        if schema_name not in self._responses:
            raise ModelInvocationError(f"No example response for schema '{schema_name}'")
        return json.dumps(self._responses[schema_name])
