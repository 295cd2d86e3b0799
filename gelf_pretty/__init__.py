"""gelf-pretty — render GELF JSON log streams as human-readable text."""

__version__ = "0.1.0"
