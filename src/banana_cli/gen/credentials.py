from __future__ import annotations

import os
from typing import Mapping, Optional, Protocol

DEFAULT_API_KEY_ENV = "GEMINI_API_KEY"


class CredentialSource(Protocol):
    @property
    def name(self) -> str: ...

    def get(self) -> Optional[str]: ...


class EnvCredentialSource:
    def __init__(self, env_var: str = DEFAULT_API_KEY_ENV, environ: Optional[Mapping[str, str]] = None):
        self.env_var = env_var
        self._environ = environ

    @property
    def name(self) -> str:
        return self.env_var

    def get(self) -> Optional[str]:
        environ = self._environ if self._environ is not None else os.environ
        return environ.get(self.env_var) or None


class StaticCredentialSource:
    def __init__(self, api_key: Optional[str], name: str = DEFAULT_API_KEY_ENV):
        self._api_key = api_key
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def get(self) -> Optional[str]:
        return self._api_key


def resolve_api_key(explicit: Optional[str], source: CredentialSource) -> Optional[str]:
    return explicit or source.get()
