"""Installed version of cord."""

from importlib.metadata import PackageNotFoundError, version


def get_version() -> str:
    """Version of the installed ``cord`` distribution, ``0.0.0`` when not installed."""
    try:
        return version("cord")
    except PackageNotFoundError:
        return "0.0.0"
