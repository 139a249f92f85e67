class SchemaValidationError(Exception):
    """Raised when structured data does not conform to an expected schema."""

    def __init__(self, schema_name: str, violations: list[str]) -> None:
        self.schema_name = schema_name
        self.violations = list(violations)
        super().__init__(f"{schema_name} failed validation: {'; '.join(self.violations)}")
