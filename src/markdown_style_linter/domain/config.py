"""Project settings for the linter. Immutable value object created by Infrastructure."""

import logging
from typing import Optional

DEFAULT_EXTENSIONS: tuple[str, ...] = (".md", ".markdown")

_KNOWN_KEYS: frozenset[str] = frozenset(
    {"style", "ignore_front_matter", "jobs", "extensions", "exclude", "show_aliases"}
)


class ConfigurationLoader:
    """
    Settings from ``[tool.markdown-style]``.

    Domain does not read the filesystem; Infrastructure calls
    ConfigFileLoader.load_config_from_fs() and constructs
    ConfigurationLoader(config_dict) at the composition root.
    """

    def __init__(self, config_dict: Optional[dict[str, object]] = None) -> None:
        self._config: dict[str, object] = dict(config_dict or {})
        if self._config:
            self.validate_config(self._config)

    def validate_config(self, config: dict[str, object]) -> None:
        """Warn about keys this version does not understand."""
        for key in sorted(set(config) - _KNOWN_KEYS):
            logging.getLogger(__name__).warning(
                "Configuration Warning: unknown key '%s' in [tool.markdown-style]", key
            )

    @property
    def config(self) -> dict[str, object]:
        """Return the loaded configuration."""
        return self._config

    @property
    def style(self) -> Optional[str]:
        raw = self._config.get("style")
        return raw if isinstance(raw, str) and raw else None

    @property
    def ignore_front_matter(self) -> bool:
        return self._config.get("ignore_front_matter") is True

    @property
    def show_aliases(self) -> bool:
        return self._config.get("show_aliases") is True

    @property
    def jobs(self) -> int:
        raw = self._config.get("jobs", 1)
        if isinstance(raw, int) and not isinstance(raw, bool) and raw > 0:
            return raw
        return 1

    @property
    def extensions(self) -> list[str]:
        raw = self._config.get("extensions")
        if isinstance(raw, list):
            exts = [str(x) for x in raw if isinstance(x, str)]
            return [e if e.startswith(".") else f".{e}" for e in exts]
        return list(DEFAULT_EXTENSIONS)

    @property
    def exclude(self) -> list[str]:
        """Path fragments to leave out of file discovery."""
        raw = self._config.get("exclude", [])
        if isinstance(raw, list):
            return [str(x) for x in raw if isinstance(x, str)]
        return []
