"""slimcheck: Dockerfile and .dockerignore size/security linter."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("slimcheck")
except PackageNotFoundError:
    __version__ = "0.0.0.dev0"
