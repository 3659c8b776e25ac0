from .fetcher import ContentFetcher, FetchedContent, convert_github_url_to_raw

__all__ = ["ContentFetcher", "FetchedContent", "convert_github_url_to_raw"]
