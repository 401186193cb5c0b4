from pmtracker.infrastructure.fetching.image_fetcher import ImageFetcher

__all__ = ["ImageFetcher"]
