"""keepergen - protoc plugin generating Cosmos SDK keeper store accessors."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("keepergen")
except PackageNotFoundError:
    __version__ = "(local)"
