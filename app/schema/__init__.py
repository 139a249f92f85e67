from app.schema.exceptions import SchemaValidationError
from app.schema.models import Field, Schema
from app.schema.validator import validate

__all__ = ["Field", "Schema", "SchemaValidationError", "validate"]
