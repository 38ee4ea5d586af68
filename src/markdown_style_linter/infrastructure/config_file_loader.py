"""Load [tool.markdown-style] from pyproject.toml. Infrastructure I/O only."""

import sys
from pathlib import Path
from typing import Optional

from markdown_style_linter.domain.errors import ConfigurationError
from markdown_style_linter.domain.protocols import ConfigFileLoaderProtocol

if sys.version_info >= (3, 11):
    import tomllib as toml_lib
else:
    import tomli as toml_lib

SECTION = "markdown-style"


class ConfigFileLoader(ConfigFileLoaderProtocol):
    """
    Loads config from the nearest pyproject.toml, walking up from ``start``.

    A relative ``style`` path is resolved against the directory holding the
    pyproject.toml it came from.
    """

    @staticmethod
    def load_config_from_fs(start: Optional[str] = None) -> dict[str, object]:
        """
        Return the [tool.markdown-style] table, or an empty dict when none is found.

        Raises ConfigurationError when the nearest pyproject.toml is not valid TOML.
        """
        current_path = Path(start).resolve() if start else Path.cwd()
        while True:
            config_file = current_path / "pyproject.toml"
            if config_file.is_file():
                try:
                    with config_file.open("rb") as f:
                        data = toml_lib.load(f)
                except OSError:
                    return {}
                except toml_lib.TOMLDecodeError as exc:
                    raise ConfigurationError(f"Invalid TOML in {config_file}: {exc}") from exc
                tool_section = data.get("tool", {}) or {}
                config_dict = dict(tool_section.get(SECTION, {}) or {})
                style = config_dict.get("style")
                if isinstance(style, str) and style and not Path(style).is_absolute():
                    config_dict["style"] = str(current_path / style)
                return config_dict
            if current_path.parent == current_path:
                return {}
            current_path = current_path.parent
