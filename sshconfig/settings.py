"""Lookups across the user's and the system's SSH config files."""

from __future__ import annotations

import os
import threading
from collections.abc import Callable
from typing import Optional, Union

from .nodes import Config, homedir
from .parser import parse_file
from .validators import SSHConfigError, default, validate

ConfigFinder = Callable[[], Union[str, "os.PathLike[str]"]]


def user_config_finder() -> str:
    """Return the path of the current user's SSH config file."""
    return os.path.join(homedir(), ".ssh", "config")


def system_config_finder() -> str:
    """Return the path of the system-wide SSH config file."""
    return os.path.join("/", "etc", "ssh", "ssh_config")


def _parse_if_present(filename: Union[str, "os.PathLike[str]"]) -> Optional[Config]:
    try:
        return parse_file(os.fspath(filename))
    except FileNotFoundError:
        return None


def _find_value(config: Config, alias: str, key: str) -> str:
    value = config.get(alias, key)
    if not value:
        return ""
    validate(key, value)
    return value


class UserSettings:
    """Settings read from ~/.ssh/config and /etc/ssh/ssh_config.

    The files are parsed once, on the first lookup, and cached. A custom
    finder set with config_finder replaces both files.
    """

    def __init__(
        self,
        ignore_errors: bool = False,
        user_config_finder: Optional[ConfigFinder] = None,
        system_config_finder: Optional[ConfigFinder] = None,
    ) -> None:
        self.ignore_errors = ignore_errors
        self._user_finder = user_config_finder
        self._system_finder = system_config_finder
        self._custom_finder: Optional[ConfigFinder] = None
        self._custom: Optional[Config] = None
        self._user: Optional[Config] = None
        self._system: Optional[Config] = None
        self._error: Optional[BaseException] = None
        self._loaded = False
        self._lock = threading.Lock()

    def config_finder(self, finder: ConfigFinder) -> None:
        """Read configuration only from the file that finder names.

        Must be called before the first lookup to take effect.
        """
        if finder is None:
            raise TypeError("cannot call config_finder with None")
        self._custom_finder = finder

    def _load_configs(self) -> None:
        if self._custom_finder is not None:
            # A missing custom file is an error: the caller asked for it.
            self._custom = parse_file(os.fspath(self._custom_finder()))
            return
        self._user = _parse_if_present((self._user_finder or user_config_finder)())
        self._system = _parse_if_present(
            (self._system_finder or system_config_finder)()
        )

    def _load(self) -> None:
        with self._lock:
            if self._loaded:
                return
            self._loaded = True
            try:
                self._load_configs()
            except (OSError, SSHConfigError) as exc:
                self._error = exc

    def _configs(self) -> list[Config]:
        self._load()
        if self._error is not None and not self.ignore_errors:
            raise self._error
        return [c for c in (self._custom, self._user, self._system) if c is not None]

    def get_strict(self, alias: str, key: str) -> str:
        """Return the first value for key in a host matching alias.

        Falls back to the keyword's default. Raises if a config file could
        not be parsed (unless ignore_errors is set) or the value is invalid.
        """
        for config in self._configs():
            value = _find_value(config, alias, key)
            if value:
                return value
        return default(key)

    def get_all_strict(self, alias: str, key: str) -> list[str]:
        """Return every value for key in hosts matching alias.

        Values come from the first file that has any; otherwise the
        keyword's default, if it has one, is the only value.
        """
        for config in self._configs():
            values = config.get_all(alias, key)
            if values:
                return values
        fallback = default(key)
        return [fallback] if fallback else []

    def get(self, alias: str, key: str) -> str:
        """Like get_strict, but return "" instead of raising."""
        try:
            return self.get_strict(alias, key)
        except (OSError, SSHConfigError):
            return ""

    def get_all(self, alias: str, key: str) -> list[str]:
        """Like get_all_strict, but return [] instead of raising."""
        try:
            return self.get_all_strict(alias, key)
        except (OSError, SSHConfigError):
            return []


DEFAULT_USER_SETTINGS = UserSettings(
    ignore_errors=False,
    user_config_finder=user_config_finder,
    system_config_finder=system_config_finder,
)


def get(alias: str, key: str) -> str:
    """Look up key for alias in the default settings, or return ""."""
    return DEFAULT_USER_SETTINGS.get(alias, key)


def get_all(alias: str, key: str) -> list[str]:
    """Look up every value of key for alias in the default settings."""
    return DEFAULT_USER_SETTINGS.get_all(alias, key)


def get_strict(alias: str, key: str) -> str:
    """Look up key for alias in the default settings, raising on errors."""
    return DEFAULT_USER_SETTINGS.get_strict(alias, key)


def get_all_strict(alias: str, key: str) -> list[str]:
    """Look up every value of key for alias, raising on errors."""
    return DEFAULT_USER_SETTINGS.get_all_strict(alias, key)