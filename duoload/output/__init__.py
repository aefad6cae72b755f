from .anki import AnkiPackageSink
from .base import Destination, OutputSink, is_stream
from .json_output import JsonOutputSink

__all__ = ["AnkiPackageSink", "Destination", "JsonOutputSink", "OutputSink", "is_stream"]
