"""Logo download workers."""

from .worker import LogoDownloader

__all__ = ["LogoDownloader"]
