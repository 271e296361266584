"""consul-register: declarative ACL, KV and catalog management for Consul."""

__version__ = "0.1.0"
