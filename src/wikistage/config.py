"""Configuration management for Wikistage.

Settings come from the process environment, optionally seeded from a
dotenv file. The resulting ``Config`` is immutable and is passed explicitly
to everything that needs it.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path

from dotenv import dotenv_values, find_dotenv

from wikistage.core.routing import normalize_prefix
from wikistage.errors import ConfigError

ENV_FILENAME = ".env"

PREFIX_VAR = "APPLICATION_PREFIX"
PORT_VAR = "APPLICATION_PORT"
LEGACY_PORT_VAR = "ASPNETCORE_PORT"
HOST_VAR = "APPLICATION_HOST"
PAGES_DIR_VAR = "PAGES_DIR"
TEMPLATES_DIR_VAR = "TEMPLATES_DIR"


@dataclass(frozen=True)
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080
    prefix: str = ""


@dataclass(frozen=True)
class StorageConfig:
    """Filesystem locations for pages and templates."""

    pages_dir: Path = field(default_factory=lambda: Path("pages"))
    templates_dir: Path = field(default_factory=lambda: Path("templates"))


@dataclass(frozen=True)
class Config:
    """Application configuration."""

    server: ServerConfig = field(default_factory=ServerConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    env_file: Path | None = None

    @classmethod
    def load(
        cls,
        env_file: Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> "Config":
        """Load configuration from a dotenv file and the environment.

        If env_file is provided, it must exist. Otherwise a .env file is
        searched for from the current directory upwards and used if found.
        Variables already set in the environment take precedence over the
        dotenv file.

        Args:
            env_file: Optional explicit path to a dotenv file
            environ: Environment mapping (default: os.environ)

        Returns:
            Config instance with defaults for unset variables

        Raises:
            ConfigError: If the env file is missing or a value is invalid
        """
        if env_file is not None:
            if not env_file.is_file():
                raise ConfigError(f"Environment file not found: {env_file}")
            source_file: Path | None = env_file
        else:
            discovered = find_dotenv(ENV_FILENAME, usecwd=True)
            source_file = Path(discovered) if discovered else None

        values: dict[str, str] = {}
        if source_file is not None:
            try:
                file_values = dotenv_values(source_file)
            except (OSError, UnicodeDecodeError) as e:
                raise ConfigError(f"Cannot read environment file {source_file}: {e}") from e
            values.update({k: v for k, v in file_values.items() if v is not None})
        values.update(os.environ if environ is None else environ)

        return cls.from_mapping(values, env_file=source_file)

    @classmethod
    def from_mapping(
        cls,
        values: Mapping[str, str],
        *,
        env_file: Path | None = None,
    ) -> "Config":
        """Build configuration from a mapping of variable names to values.

        Raises:
            ConfigError: If a value is invalid
        """
        server = ServerConfig(
            host=values.get(HOST_VAR) or "127.0.0.1",
            port=_parse_port(values),
            prefix=normalize_prefix(values.get(PREFIX_VAR, "")),
        )
        storage = StorageConfig(
            pages_dir=Path(values.get(PAGES_DIR_VAR) or "pages"),
            templates_dir=Path(values.get(TEMPLATES_DIR_VAR) or "templates"),
        )
        return cls(server=server, storage=storage, env_file=env_file)

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        prefix: str | None = None,
        pages_dir: Path | None = None,
        templates_dir: Path | None = None,
    ) -> "Config":
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config.
        """
        server = replace(
            self.server,
            host=host if host is not None else self.server.host,
            port=port if port is not None else self.server.port,
            prefix=normalize_prefix(prefix) if prefix is not None else self.server.prefix,
        )
        storage = replace(
            self.storage,
            pages_dir=pages_dir if pages_dir is not None else self.storage.pages_dir,
            templates_dir=(
                templates_dir if templates_dir is not None else self.storage.templates_dir
            ),
        )
        return replace(self, server=server, storage=storage)


def _parse_port(values: Mapping[str, str]) -> int:
    raw = values.get(PORT_VAR) or values.get(LEGACY_PORT_VAR)
    if not raw:
        return ServerConfig.port
    try:
        port = int(raw)
    except ValueError:
        raise ConfigError(f"Port must be numeric, got {raw!r}") from None
    if not 0 < port < 65536:
        raise ConfigError(f"Port out of range: {port}")
    return port
