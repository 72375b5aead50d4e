from pathlib import Path

import yaml
from pydantic import ValidationError

from linkylink.rules.models import Rules

# Packaged copy, used when no explicit path is configured.
DEFAULT_RULES_PATH = Path(__file__).resolve().with_name("rules.yaml")


def _extract_yaml(content: str) -> str:
    """Return the first ```yaml fenced block, or the whole text if there is none."""
    block: list[str] = []
    in_block = False

    for line in content.splitlines():
        stripped = line.strip()
        if stripped.startswith("```yaml"):
            in_block = True
            continue
        if in_block and stripped.startswith("```"):
            return "\n".join(block)
        if in_block:
            block.append(line)

    return "\n".join(block) if in_block else content


def load_rules(path: Path | None = None) -> Rules:
    """
    Load and validate the console rules file.
    Raises FileNotFoundError if the file is missing.
    Raises ValueError if the YAML or the schema is invalid.
    """
    path = Path(path) if path is not None else DEFAULT_RULES_PATH
    if not path.exists():
        raise FileNotFoundError(f"Rules file not found at: {path}")

    content = path.read_text(encoding="utf-8")

    try:
        data = yaml.safe_load(_extract_yaml(content))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in rules file: {e}") from e

    try:
        return Rules.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Rules validation failed:\n{e}") from e
