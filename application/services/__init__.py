from .rate_cache import RateCache

__all__ = ['RateCache']
