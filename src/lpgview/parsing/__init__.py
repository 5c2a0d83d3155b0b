"""Document decoding and graph compilation."""

from .compiler import GraphCompiler, compile_document
from .decoder import DocumentFormat, decode_document, decode_lpg, decode_toml

__all__ = [
    "DocumentFormat",
    "GraphCompiler",
    "compile_document",
    "decode_document",
    "decode_lpg",
    "decode_toml",
]
