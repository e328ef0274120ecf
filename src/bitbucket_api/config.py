"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent configuration for bitbucket_api:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.bitbucket-api/`` on macOS and Windows. See :func:`get_config_dir`
  and :func:`get_cache_dir`.
* **Client config** -- A single :class:`~bitbucket_api.models.ClientConfig`
  JSON file storing the base URL, credentials source, request settings
  and cache settings. Managed via :func:`load_config` and
  :func:`save_config`.
* **Precedence resolution** -- :func:`resolve_config` merges explicit
  arguments, environment variables and the config file into the final
  effective configuration.
* **Credential resolution** -- :func:`resolve_credential` reads secrets
  from env vars, files, or interactive prompts.

The config file is written through a temp file and an atomic rename
(:func:`_atomic_write`).
"""

from __future__ import annotations

import getpass
import json
import os
import platform
import sys
import tempfile
from pathlib import Path
from typing import Optional

from bitbucket_api.exceptions import ConfigError
from bitbucket_api.models import ClientConfig

_APP_NAME = "bitbucket-api"
_CONFIG_FILENAME = "config.json"

ENV_API_URL = "BITBUCKET_API_URL"
ENV_USERNAME = "BITBUCKET_USERNAME"
ENV_PASSWORD = "BITBUCKET_PASSWORD"


# --- Directories ---


def _is_xdg_platform() -> bool:
    system = platform.system()
    return system == "Linux" or system.endswith("BSD")


def _app_dir(xdg_var: str, xdg_default: str, fallback: str = "") -> Path:
    """Return an application directory, creating it if necessary.

    On Linux/BSD this is ``$<xdg_var>/bitbucket-api``, with
    ``~/<xdg_default>`` standing in for an unset variable. Elsewhere
    everything lives under ``~/.bitbucket-api/<fallback>``.
    """
    if _is_xdg_platform():
        root = Path(os.environ.get(xdg_var) or Path.home() / xdg_default)
        path = root / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}" / fallback
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_config_dir() -> Path:
    """Directory holding ``config.json``."""
    return _app_dir("XDG_CONFIG_HOME", ".config")


def get_cache_dir() -> Path:
    """Root directory of the disk cache backend. Safe to delete at any time."""
    return _app_dir("XDG_CACHE_HOME", ".cache", "cache")


def _atomic_write(path: Path, data: str) -> None:
    """Replace *path* with *data* through a temp file in the same directory."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp, path)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise


# --- Client config ---


def _config_path() -> Path:
    """Path to the config file."""
    return get_config_dir() / _CONFIG_FILENAME


def load_config(path: Optional[Path] = None) -> ClientConfig:
    """Load the client configuration.

    Args:
        path: Explicit config file. Defaults to ``config.json`` in
            :func:`get_config_dir`.

    Returns:
        The deserialised :class:`~bitbucket_api.models.ClientConfig`. If
        the file does not exist, a default instance is returned.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            Pydantic validation.
    """
    path = path or _config_path()
    if not path.is_file():
        return ClientConfig()
    try:
        text = path.read_text(encoding="utf-8")
        data = json.loads(text)
        return ClientConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid config at {path}: {exc}") from exc


def save_config(config: ClientConfig, path: Optional[Path] = None) -> None:
    """Persist the client configuration atomically to disk.

    Args:
        config: The configuration to save.
        path: Explicit config file. Defaults to ``config.json`` in
            :func:`get_config_dir`.
    """
    data = config.model_dump(mode="json")
    _atomic_write(path or _config_path(), json.dumps(data, indent=2) + "\n")


# --- Precedence resolution ---


def resolve_config(
    base_url: Optional[str] = None,
    username: Optional[str] = None,
    password_source: Optional[str] = None,
    path: Optional[Path] = None,
) -> ClientConfig:
    """Resolve config with full precedence chain.

    Precedence (high to low):
        1. Explicit arguments
        2. Environment variables (``BITBUCKET_API_URL``, ``BITBUCKET_USERNAME``,
           and ``BITBUCKET_PASSWORD``, which selects ``env:BITBUCKET_PASSWORD``)
        3. Config file (``~/.config/bitbucket-api/config.json``)
        4. Defaults

    The password itself is not read here; it stays a source descriptor
    until :func:`resolve_credential` is called on it.

    Returns:
        The effective :class:`~bitbucket_api.models.ClientConfig`.
    """
    config = load_config(path)

    env_url = os.environ.get(ENV_API_URL)
    if base_url is not None:
        config.base_url = base_url
    elif env_url:
        config.base_url = env_url

    env_user = os.environ.get(ENV_USERNAME)
    if username is not None:
        config.credentials.username = username
    elif env_user:
        config.credentials.username = env_user

    if password_source is not None:
        config.credentials.password_source = password_source
    elif os.environ.get(ENV_PASSWORD):
        config.credentials.password_source = f"env:{ENV_PASSWORD}"

    return config


# --- Credential source resolution ---


def resolve_credential(source: str) -> str:
    """Resolve a credential from its source descriptor.

    Supported formats:
        - ``"env:VAR_NAME"`` -- reads ``os.environ["VAR_NAME"]``
        - ``"file:/path/to/file"`` -- reads file content, stripped of whitespace
        - ``"prompt"`` -- prompts user interactively (requires a TTY)

    Args:
        source: The source descriptor string.

    Returns:
        The resolved credential string.

    Raises:
        ConfigError: If the source can't be resolved.
    """
    if source.startswith("env:"):
        var_name = source[4:]
        value = os.environ.get(var_name)
        if value is None:
            raise ConfigError(
                f"Environment variable '{var_name}' is not set (source: {source})"
            )
        return value

    if source.startswith("file:"):
        file_path = source[5:]
        path = Path(file_path).expanduser()
        if not path.is_file():
            raise ConfigError(f"Credential file not found: {path} (source: {source})")
        try:
            return path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise ConfigError(f"Cannot read credential file {path}: {exc}") from exc

    if source == "prompt":
        if not sys.stdin.isatty():
            raise ConfigError(
                "Cannot prompt for credentials: stdin is not a TTY (source: prompt)"
            )
        return getpass.getpass("Bitbucket password: ")

    raise ConfigError(f"Unknown credential source format: {source}")
