"""helm3mixin — Dockerfile build steps for installing the Helm 3 client."""

__version__ = "0.1.0"
