"""Named schemas for every pipeline stage."""

from app.schema.models import Field, Schema

FORMATS = ("Email", "JSON", "PDF")
INTENTS = ("RFQ", "Complaint", "Invoice", "Regulation", "Fraud Risk", "Other")
ROUTE_ACTIONS = ("create_ticket", "escalate_issue", "flag_compliance_risk")

CLASSIFICATION = Schema(
    name="classification",
    fields=(
        Field("format", "string", choices=FORMATS, description="Format of the document."),
        Field("intent", "string", choices=INTENTS, description="Business intent of the document."),
    ),
)

EMAIL_EXTRACTION = Schema(
    name="email_extraction",
    fields=(
        Field("sender", "string", required=False),
        Field("subject", "string", required=False),
        Field("sender_intent", "string", required=False),
        Field("key_entities", "array", required=False, items="string"),
        Field("summary", "string", required=False),
    ),
    allow_extra=True,
)

PDF_EXTRACTION = Schema(
    name="pdf_extraction",
    fields=(
        Field("document_title", "string", required=False),
        Field("issuer", "string", required=False),
        Field("sender_intent", "string", required=False),
        Field("key_entities", "array", required=False, items="string"),
        Field("summary", "string", required=False),
    ),
    allow_extra=True,
)

ROUTING = Schema(
    name="routing",
    fields=(
        Field(
            "actionTaken",
            "string",
            required=False,
            choices=ROUTE_ACTIONS,
            description="The follow-up action to trigger.",
        ),
        Field(
            "details",
            "string",
            required=False,
            description="Relevant information such as a ticket ID or risk details.",
        ),
    ),
)

# Shape of the JSON webhook document itself, not of a model response.
BUSINESS_PAYLOAD = Schema(
    name="business_payload",
    fields=(
        Field("event_type", "string"),
        Field("timestamp", "string"),
        Field("data", "object"),
    ),
    allow_extra=True,
)
