from .load import load_table

__all__ = ["load_table"]
