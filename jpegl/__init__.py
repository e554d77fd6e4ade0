"""Lossless JPEG headers, Huffman tables, prediction, comments and decoding."""

__version__ = "0.1.0"

__all__ = [
    "bytestream",
    "comments",
    "decoder",
    "headers",
    "huffcodes",
    "huffio",
    "huffsizes",
    "hufftable",
    "image",
    "markers",
    "predictor",
    "tables",
]