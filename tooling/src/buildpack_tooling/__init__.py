"""Package and publish Cloud Native Buildpacks (buildpacks and extensions), multi-arch aware."""

__version__ = "0.1.0"
