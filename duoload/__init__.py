"""Export Duocards vocabulary to Anki packages or JSON."""

__version__ = "0.1.2"
