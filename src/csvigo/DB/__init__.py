from .lookup_file import LookupWriter, LookupFile
from .storage import save_table, load_table

__all__ = ["LookupWriter", "LookupFile", "save_table", "load_table"]
