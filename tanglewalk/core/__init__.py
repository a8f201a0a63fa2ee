"""Core building blocks: capabilities, adapters, path sets, frontiers and traversers."""
