"""Core fetch components."""

from .fetcher import HttpFetcher
from .protocols import BatchFetcher, Fetcher, Request, Response
from .rate_limit import RateLimiter

__all__ = ["BatchFetcher", "Fetcher", "HttpFetcher", "RateLimiter", "Request", "Response"]
