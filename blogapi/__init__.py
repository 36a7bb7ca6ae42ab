"""LSAT blog content API."""
