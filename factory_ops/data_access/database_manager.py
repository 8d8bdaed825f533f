# factory_ops/data_access/database_manager.py

import sqlite3
import logging
from factory_ops.config import DATABASE_PATH

logger = logging.getLogger(__name__)

class DatabaseManager:
    """SQLite file acting as a small document database (collection, doc_id) -> JSON payload."""

    def __init__(self, db_path=DATABASE_PATH):
        self.db_path = db_path
        self.conn = None

    def __enter__(self):
        try:
            self.conn = sqlite3.connect(self.db_path)
            self.conn.row_factory = sqlite3.Row # Access columns by name
            logger.debug(f"Database connection established to {self.db_path}")
            return self.conn
        except sqlite3.Error as e:
            logger.error(f"Error connecting to database {self.db_path}: {e}")
            raise

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.conn:
            self.conn.close()
            self.conn = None
            logger.debug("Database connection closed.")

    def execute_query(self, query, params=None):
        try:
            with self as conn:
                cursor = conn.cursor()
                cursor.execute(query, params or ())
                conn.commit()
                return cursor
        except sqlite3.Error as e:
            logger.error(f"Query execution failed: {query} with params {params} - {e}")
            raise

    def fetch_one(self, query, params=None):
        try:
            with self as conn:
                cursor = conn.cursor()
                cursor.execute(query, params or ())
                return cursor.fetchone()
        except sqlite3.Error as e:
            logger.error(f"Fetch one failed: {query} with params {params} - {e}")
            raise

    def create_tables(self):
        queries = [
            """
            CREATE TABLE IF NOT EXISTS documents (
                collection TEXT NOT NULL,
                doc_id TEXT NOT NULL,
                payload TEXT NOT NULL, -- JSON
                updated_at TEXT NOT NULL, -- ISO datetime
                PRIMARY KEY (collection, doc_id)
            );
            """,
        ]
        for query in queries:
            self.execute_query(query)
        logger.info("Document tables checked/created.")

    # --- document helpers ---

    def get_document(self, collection: str, doc_id: str):
        row = self.fetch_one(
            "SELECT payload FROM documents WHERE collection = ? AND doc_id = ?",
            (collection, doc_id),
        )
        return row["payload"] if row else None

    def set_document(self, collection: str, doc_id: str, payload: str, updated_at: str):
        # whole-document replace, last writer wins
        self.execute_query(
            "INSERT OR REPLACE INTO documents (collection, doc_id, payload, updated_at) VALUES (?, ?, ?, ?)",
            (collection, doc_id, payload, updated_at),
        )
