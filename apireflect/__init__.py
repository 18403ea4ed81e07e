"""API type descriptions in a typespace and TypeScript declaration rendering."""

__version__ = "0.1.0"