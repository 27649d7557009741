"""Chat service core: models, validated messages, configuration, repositories, service, interceptors and API handlers."""

__version__ = "0.1.0"