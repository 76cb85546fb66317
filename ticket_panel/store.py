"""Per-guild ticket panel configuration.

Each guild that ran ``!setup`` has exactly one :class:`GuildConfig`. The file backed
store keeps the whole mapping in memory, reads it once on :meth:`JsonConfigStore.load`
and rewrites the entire file on every :meth:`JsonConfigStore.set`.
"""

import logging
import re
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from ticket_panel.config import DEFAULT_BANNER_URL
from ticket_panel.errors import ConfigStoreError

COLOR_PATTERN = re.compile(r"^#?[0-9A-Fa-f]{6}$")


def normalize_color(value: str) -> str:
    """Return ``value`` as ``#RRGGBB``, adding the leading ``#`` when missing.

    Raises:
        ValueError: If ``value`` is not six hex digits with an optional ``#``.
    """
    value = value.strip()
    if not COLOR_PATTERN.match(value):
        msg = f"Invalid hex color: {value!r}"
        raise ValueError(msg)
    return value if value.startswith("#") else f"#{value}"


class GuildConfig(BaseModel):
    """Ticket panel settings for a single guild.

    Field aliases match the keys written to the configuration file.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    staff_role_id: str = Field(alias="roleId")
    accent_color: str = Field(alias="color")
    banner_media_url: str = Field(default=DEFAULT_BANNER_URL, alias="gif")

    @field_validator("staff_role_id", mode="before")
    @classmethod
    def _coerce_role_id(cls, value: object) -> object:
        return str(value) if isinstance(value, int) else value

    @field_validator("accent_color")
    @classmethod
    def _normalize_color(cls, value: str) -> str:
        return normalize_color(value)

    @field_validator("banner_media_url", mode="before")
    @classmethod
    def _fallback_banner(cls, value: str | None) -> str:
        return value or DEFAULT_BANNER_URL

    @property
    def color_value(self) -> int:
        """Accent color as an integer, as expected by ``discord.Embed``."""
        return int(self.accent_color.removeprefix("#"), 16)


_CONFIG_MAPPING = TypeAdapter(dict[str, GuildConfig])


class ConfigStore(Protocol):
    """Interface shared by every guild configuration backend."""

    def load(self) -> None: ...

    def get(self, guild_id: int | str) -> GuildConfig | None: ...

    def set(self, guild_id: int | str, config: GuildConfig) -> None: ...


class MemoryConfigStore:
    """Configuration store that only lives in memory."""

    def __init__(self, configs: dict[str, GuildConfig] | None = None) -> None:
        """Initialize the store, optionally seeded with existing records."""
        self._configs: dict[str, GuildConfig] = dict(configs or {})
        self.log = logging.getLogger(__name__)

    def load(self) -> None:
        """Nothing to read for an in-memory store."""

    def get(self, guild_id: int | str) -> GuildConfig | None:
        """Return the configuration for ``guild_id`` or ``None`` if the guild never ran setup."""
        return self._configs.get(str(guild_id))

    def set(self, guild_id: int | str, config: GuildConfig) -> None:
        """Replace the whole record for ``guild_id``."""
        self._configs[str(guild_id)] = config


class JsonConfigStore(MemoryConfigStore):
    """Configuration store persisted as a single pretty-printed JSON object.

    The file maps guild id strings to ``{"roleId": ..., "color": ..., "gif": ...}``.
    Writes are not atomic and not locked.
    """

    def __init__(self, path: Path | str) -> None:
        """Initialize the store for the file at ``path``. Nothing is read until :meth:`load`."""
        super().__init__()
        self.path = Path(path)

    def load(self) -> None:
        """Read the configuration file, creating an empty one if it does not exist.

        Raises:
            ConfigStoreError: If the file cannot be read, written or parsed.
        """
        if not self.path.exists():
            self._configs = {}
            self._write()
            self.log.info("Created empty guild configuration at %s", self.path)
            return

        try:
            self._configs = _CONFIG_MAPPING.validate_json(self.path.read_bytes())
        except OSError as exc:
            msg = f"Could not read guild configuration {self.path}"
            raise ConfigStoreError(msg) from exc
        except ValidationError as exc:
            msg = f"Guild configuration {self.path} is malformed"
            raise ConfigStoreError(msg) from exc

        self.log.info("Loaded %d guild configuration(s) from %s", len(self._configs), self.path)

    def set(self, guild_id: int | str, config: GuildConfig) -> None:
        """Replace the record for ``guild_id`` and rewrite the whole file before returning."""
        super().set(guild_id, config)
        self._write()
        self.log.info("Saved guild configuration for guild %s", guild_id)

    def _write(self) -> None:
        try:
            self.path.write_bytes(_CONFIG_MAPPING.dump_json(self._configs, indent=2, by_alias=True))
        except OSError as exc:
            msg = f"Could not write guild configuration {self.path}"
            raise ConfigStoreError(msg) from exc
