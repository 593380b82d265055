"""Print the environment variables understood by the letterbox backend.

Usage:
    python scripts/export_settings.py > env-vars.json
"""

import json
import sys
from pathlib import Path

from pydantic import SecretStr
from pydantic_core import PydanticUndefined
from pydantic_settings import BaseSettings

root_path = Path(__file__).parent.parent
sys.path.insert(0, str(root_path / "src" / "api"))

from infrastructure.settings import (  # noqa: E402
    DatabaseSettings,
    KakaoOAuthSettings,
    LetterSettings,
    Settings,
)


def describe(settings_class: type[BaseSettings]) -> dict:
    prefix = settings_class.model_config.get("env_prefix", "")
    variables = []

    for name, field in settings_class.model_fields.items():
        default = field.get_default()
        extra = field.json_schema_extra
        if not isinstance(extra, dict):
            extra = {}
        # Empty secrets have to be provided in production unless marked optional
        required = default is PydanticUndefined or (
            isinstance(default, SecretStr)
            and default.get_secret_value() == ""
            and not extra.get("optional", False)
        )

        if isinstance(default, SecretStr) or required:
            shown = None
        elif isinstance(default, bool):
            shown = default
        else:
            shown = str(default)

        variables.append(
            {
                "env_var": f"{prefix}{name.upper()}",
                "default": shown,
                "required": required,
                "description": field.description or "",
            }
        )

    return {
        "prefix": prefix,
        "doc": (settings_class.__doc__ or "").strip().splitlines()[0],
        "variables": variables,
    }


def main() -> None:
    classes = [Settings, DatabaseSettings, KakaoOAuthSettings, LetterSettings]
    json.dump({cls.__name__: describe(cls) for cls in classes}, sys.stdout, indent=2)
    sys.stdout.write("\n")


if __name__ == "__main__":
    main()
