from __future__ import annotations

import asyncio

from config import settings
from domain.enums import Region
from infrastructure import RiotAPIClient
from application.use_cases import ImportMatchHistoryUseCase, ImportFailedError
from core.logging.logger import get_logger
from .app_services import AppServices


class ImportCommand:
    """Import recent match history with a progress bar. Ctrl+C stops after the current match."""

    def __init__(self, services: AppServices) -> None:
        self.services = services
        self._log = get_logger(__name__, service="import-cli")
        self._cancelled = False

    def _make_progress_cb(self, label: str):
        width = 30
        def _progress(current: int, total: int, imported: int) -> None:
            filled = int(width * (current / total)) if total else 0
            bar = "█" * filled + "-" * (width - filled)
            print(f"\r{label} | {bar} | {current}/{total} new={imported}", end="", flush=True)
        return _progress

    async def _run(self, count: int) -> None:
        config = self.services.players.get_user_config()
        if config is None:
            print("No account configured. Use Settings first.", flush=True)
            return
        if not config.riot_api_key:
            try:
                settings.validate()
            except ValueError as e:
                print(f"Error: {e}", flush=True)
                return
        api_key = config.riot_api_key or settings.RIOT_API_KEY

        region = Region.from_string(config.region)
        async with RiotAPIClient(api_key) as api:
            use_case = ImportMatchHistoryUseCase(
                api,
                self.services.matches,
                progress_callback=self._make_progress_cb("Importing matches"),
            )
            try:
                result = await use_case.execute(
                    config.puuid, region, count=count, is_cancelled=lambda: self._cancelled
                )
            except ImportFailedError as e:
                self._log.error(lambda: f"import-failed {e}")
                print(f"\nImport failed: {e}", flush=True)
                if e.result:
                    print(f"Kept {e.result.imported} matches imported before the failure.", flush=True)
                return

        print("", flush=True)
        status = "cancelled" if result.cancelled else "complete"
        self._log.success(f"import-{status} imported={result.imported} skipped={result.skipped}")
        print(
            f"Import {status}: {result.imported} new, {result.skipped} already stored, "
            f"{result.failed} failed.",
            flush=True,
        )

    def run(self) -> None:
        raw = input(f"How many recent matches? [{settings.IMPORT_MATCH_COUNT}]: ").strip()
        count = int(raw) if raw.isdigit() and int(raw) > 0 else settings.IMPORT_MATCH_COUNT
        self._cancelled = False
        try:
            asyncio.run(self._run(count))
        except KeyboardInterrupt:
            self._cancelled = True
            print("\nImport interrupted.", flush=True)
