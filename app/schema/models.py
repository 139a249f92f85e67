from dataclasses import dataclass, field

FieldType = str  # "string" | "boolean" | "number" | "integer" | "array" | "object"


@dataclass(frozen=True)
class Field:
    """A single named field of a stage schema."""

    name: str
    type: FieldType
    required: bool = True
    items: FieldType | None = None  # element type for arrays
    choices: tuple[str, ...] = ()  # hint for the model, not enforced locally
    description: str = ""


@dataclass(frozen=True)
class Schema:
    """Expected shape of a stage input or output."""

    name: str
    fields: tuple[Field, ...] = field(default_factory=tuple)
    allow_extra: bool = False

    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    def to_json_schema(self) -> dict[str, object]:
        """Render as a strict JSON Schema for provider structured-output modes.

        Strict mode requires every property to be listed as required, so
        optional fields are expressed as nullable instead.
        """
        properties: dict[str, object] = {}
        for f in self.fields:
            prop: dict[str, object] = {"type": f.type if f.required else [f.type, "null"]}
            if f.items is not None:
                prop["items"] = {"type": f.items}
            if f.choices:
                prop["enum"] = list(f.choices) if f.required else [*f.choices, None]
            if f.description:
                prop["description"] = f.description
            properties[f.name] = prop
        return {
            "type": "object",
            "properties": properties,
            "required": self.field_names(),
            "additionalProperties": False,
        }
