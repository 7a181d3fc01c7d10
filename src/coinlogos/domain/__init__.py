"""Domain models."""

from .models import DownloadTask, MarketEntry, MarketStatus, RunSummary

__all__ = ["DownloadTask", "MarketEntry", "MarketStatus", "RunSummary"]
