"""Configuration loading: .env files, command-line flag and environment settings."""

from __future__ import annotations

import argparse
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import ClassVar

from dotenv import dotenv_values, load_dotenv


class ConfigError(Exception):
    """A required configuration value is missing."""


def load(path: str) -> dict[str, str | None]:
    """Load variables from a .env file into the process environment.

    Variables that are already set are left untouched. Returns the values
    read from the file.
    """
    if not os.path.isfile(path):
        raise FileNotFoundError(f"open {path}: no such file or directory")
    load_dotenv(path, override=False)
    return dict(dotenv_values(path))


def parse_config(argv: list[str] | None = None) -> str:
    """Return the config file path given by the ``config-path`` flag."""
    parser = argparse.ArgumentParser(allow_abbrev=False)
    parser.add_argument(
        "-config-path",
        "--config-path",
        dest="config_path",
        default=".env",
        help="path to config file",
    )
    return parser.parse_args(argv).config_path


def _join_host_port(host: str, port: str) -> str:
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


def _require(environ: Mapping[str, str], name: str, message: str) -> str:
    value = environ.get(name, "")
    if not value:
        raise ConfigError(message)
    return value


def _environment(environ: Mapping[str, str] | None) -> Mapping[str, str]:
    return os.environ if environ is None else environ


@dataclass(frozen=True)
class _Endpoint:
    host: str
    port: str

    _host_var: ClassVar[str] = ""
    _port_var: ClassVar[str] = ""
    _label: ClassVar[str] = ""

    @classmethod
    def _read(cls, environ: Mapping[str, str] | None):
        env = _environment(environ)
        host = _require(env, cls._host_var, f"{cls._label} host not found")
        port = _require(env, cls._port_var, f"{cls._label} port not found")
        return cls(host=host, port=port)


@dataclass(frozen=True)
class GRPCConfig(_Endpoint):
    """Address of the gRPC server."""

    _host_var: ClassVar[str] = "GRPC_HOST"
    _port_var: ClassVar[str] = "GRPC_PORT"
    _label: ClassVar[str] = "grpc"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> GRPCConfig:
        """Build the configuration from ``GRPC_HOST`` and ``GRPC_PORT``."""
        return cls._read(environ)

    def address(self) -> str:
        """The ``host:port`` address, with IPv6 hosts in brackets."""
        return _join_host_port(self.host, self.port)


@dataclass(frozen=True)
class HTTPConfig(_Endpoint):
    """Address of the HTTP gateway."""

    _host_var: ClassVar[str] = "HTTP_HOST"
    _port_var: ClassVar[str] = "HTTP_PORT"
    _label: ClassVar[str] = "grpc"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> HTTPConfig:
        """Build the configuration from ``HTTP_HOST`` and ``HTTP_PORT``."""
        return cls._read(environ)

    def address(self) -> str:
        """The ``host:port`` address, with IPv6 hosts in brackets."""
        return _join_host_port(self.host, self.port)


@dataclass(frozen=True)
class SwaggerConfig(_Endpoint):
    """Address of the Swagger documentation server."""

    _host_var: ClassVar[str] = "SWAGGER_HOST"
    _port_var: ClassVar[str] = "SWAGGER_PORT"
    _label: ClassVar[str] = "swagger"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> SwaggerConfig:
        """Build the configuration from ``SWAGGER_HOST`` and ``SWAGGER_PORT``."""
        return cls._read(environ)

    def address(self) -> str:
        """The ``host:port`` address, with IPv6 hosts in brackets."""
        return _join_host_port(self.host, self.port)


@dataclass(frozen=True)
class PGConfig:
    """PostgreSQL connection settings."""

    dsn: str

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> PGConfig:
        """Build the configuration from the ``PG_DSN`` variable."""
        return cls(dsn=_require(_environment(environ), "PG_DSN", "pg dsn not found"))


@dataclass(frozen=True)
class TLSConfig:
    """Paths of the service's TLS key and certificate."""

    service_key_file_path: str = "service.key"
    service_pem_file_path: str = "service.pem"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> TLSConfig:
        """Return the fixed TLS file locations."""
        return cls()