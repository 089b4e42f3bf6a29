import logging

from rps_game.load_secrets import data_dir, db_file_name, storage_backend
from rps_game.create_sqlite_engine import create_sqlite_engine
from rps_game.services.game_db import SQLiteHistoryStore
from rps_game.services.history_store import HistoryStore, InMemoryHistoryStore
from rps_game.services.ledger_store import LedgerClient, LedgerHistoryStore

BACKENDS = ("sqlite", "memory", "ledger")


def build_history_store(
    backend: str = storage_backend,
    directory: str = data_dir,
    file_name: str = db_file_name,
    ledger_client: LedgerClient | None = None,
) -> HistoryStore:
    """Create the history store selected by configuration

    Args:
        backend (str): "sqlite", "memory" or "ledger"; anything else falls back to sqlite
        directory (str): Directory of the SQLite file
        file_name (str): SQLite file name
        ledger_client (LedgerClient | None): Client required by the ledger backend

    Raises:
        ValueError: The ledger backend was requested without a client

    Returns:
        HistoryStore: Store ready to use
    """
    if backend not in BACKENDS:
        logging.warning(f"Unknown storage backend {backend!r}, using sqlite")
        backend = "sqlite"

    if backend == "memory":
        logging.info("Using in-memory history store")
        return InMemoryHistoryStore()
    if backend == "ledger":
        if ledger_client is None:
            raise ValueError("the ledger backend needs a ledger client")
        logging.info("Using ledger history store")
        return LedgerHistoryStore(ledger_client)
    return SQLiteHistoryStore(create_sqlite_engine(directory, file_name))
