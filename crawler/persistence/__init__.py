"""Save-file format and the World codec."""

from crawler.persistence.codec import decode, encode, load_game, save_game

__all__ = ["decode", "encode", "load_game", "save_game"]
