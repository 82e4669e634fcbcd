"""Release tooling helpers: versions, image mapping, JUnit reports, YAML and file utilities."""

__version__ = "0.1.0"