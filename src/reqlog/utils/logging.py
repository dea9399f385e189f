from importlib import metadata as importlib_metadata

DISTRIBUTION_NAME = "reqlog"


def get_project_version(name: str = DISTRIBUTION_NAME, default: str = "unknown") -> str:
    """
    Return the installed version of distribution `name`.

    Falls back to `default` when the package runs from a source checkout
    without being installed.
    """
    try:
        return importlib_metadata.version(name)
    except importlib_metadata.PackageNotFoundError:
        return default


__all__ = ["DISTRIBUTION_NAME", "get_project_version"]
