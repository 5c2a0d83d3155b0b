"""
lpgview: interactive knowledge graphs from human-authored TOML documents.
"""

__version__ = "0.3.0"
