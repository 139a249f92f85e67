from functools import cache
from pathlib import Path
from string import Formatter

from app.llm.exceptions import PromptTemplateError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(name: str, prompt_dir: Path | None = None) -> str:
    """Load a named prompt template from a file.

    Args:
        name: Template name, resolved to ``<prompt_dir>/<name>.txt``.
        prompt_dir: Directory holding the templates.
                    Defaults to the bundled prompts directory.

    Returns:
        The raw template string with placeholders.

    Raises:
        PromptTemplateError: if the file cannot be read.
    """
    return _read_template((prompt_dir or _DEFAULT_PROMPT_DIR) / f"{name}.txt")


@cache
def _read_template(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PromptTemplateError(f"Failed to load prompt template: {exc}") from exc


def template_placeholders(template: str) -> set[str]:
    """Return the names of all placeholders the template declares."""
    try:
        return {field for _, field, _, _ in Formatter().parse(template) if field}
    except ValueError as exc:
        raise PromptTemplateError(f"Malformed prompt template: {exc}") from exc


def render_prompt(template: str, variables: dict[str, object]) -> str:
    """Substitute variables into the template.

    Every declared placeholder must be supplied; extra variables are ignored.

    Raises:
        PromptTemplateError: if a placeholder has no matching variable.
    """
    missing = sorted(template_placeholders(template) - variables.keys())
    if missing:
        raise PromptTemplateError(f"Missing prompt variables: {', '.join(missing)}")
    return template.format(**variables)
