from core.object_store import ObjectStore
from core.row_store import RowStore
from core.supabase_client import get_supabase_client


def get_row_store() -> RowStore:
    return RowStore(get_supabase_client())


def get_object_store() -> ObjectStore:
    return ObjectStore()
