from .duplicates import DuplicateTracker
from .policy import PageLimitPolicy
from .processor import RecordSource, TransferProcessor

__all__ = ["DuplicateTracker", "PageLimitPolicy", "RecordSource", "TransferProcessor"]
