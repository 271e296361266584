"""Consul SDK exceptions."""


class ConsulError(Exception):
    """Base error for failed Consul HTTP API calls."""


class ConsulAuthError(ConsulError):
    """Token missing, invalid or lacking permission."""


class ConsulNotFoundError(ConsulError):
    """Endpoint or resource not found."""


class ConsulServerError(ConsulError):
    """Consul answered with a 5xx status."""


class ConsulConnectionError(ConsulError):
    """Transport level failure talking to the agent."""
