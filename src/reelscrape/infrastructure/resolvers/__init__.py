from .embed_resolver import EmbedResolver

__all__ = ["EmbedResolver"]
