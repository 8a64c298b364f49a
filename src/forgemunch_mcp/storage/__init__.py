"""Storage package for index save/load operations."""

from .index_store import ForgeIndex, IndexStore, dict_to_symbol, symbol_to_dict

__all__ = ["ForgeIndex", "IndexStore", "dict_to_symbol", "symbol_to_dict"]
