from .resolver import ImageSourceResolver, ResolvedImage, linear_backoff, resolve_asset_path

__all__ = ["ImageSourceResolver", "ResolvedImage", "linear_backoff", "resolve_asset_path"]
