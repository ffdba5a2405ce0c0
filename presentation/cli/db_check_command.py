from __future__ import annotations

import sqlite3

from application.services.data_persistence_service import PersistenceError
from core.logging.logger import get_logger
from .app_services import AppServices


class DBCheckCommand:
    """Database inspection command."""

    def __init__(self, services: AppServices) -> None:
        self.log = get_logger(__name__, service="db-cli")
        self.services = services

    def run(self) -> None:
        while True:
            print("\n=== DB Check ===", flush=True)
            print(f"Database: {self.services.store.db_path}", flush=True)
            print("1) Count rows per table", flush=True)
            print("2) PRAGMA integrity_check", flush=True)
            print("3) Back", flush=True)
            choice = input("Choose: ").strip()
            if choice == "1":
                self._count_rows()
                input("Press Enter to return to DB menu...")
            elif choice == "2":
                self._integrity()
                input("Press Enter to return to DB menu...")
            elif choice == "3":
                return
            else:
                print("Invalid option.", flush=True)

    def _count_rows(self) -> None:
        try:
            counts = self.services.store.get_table_counts()
        except PersistenceError as e:
            self.log.error(lambda: f"db-count-failed {e}")
            print(f"Error: {e}", flush=True)
            return
        print("\nRow counts:", flush=True)
        for table, count in counts.items():
            print(f"- {table}: {count}", flush=True)

    def _integrity(self) -> None:
        try:
            row = self.services.store.query_one("PRAGMA integrity_check")
        except (PersistenceError, sqlite3.Error) as e:
            self.log.error(lambda: f"db-integrity-failed {e}")
            print(f"Error: {e}", flush=True)
            return
        print(f"integrity_check: {row[0] if row else 'unknown'}", flush=True)
