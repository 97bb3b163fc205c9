"""Command-line entry points: buildpack-tooling package | publish."""
