from __future__ import annotations

from datetime import datetime

from domain.enums import TagCategory
from application.services.identity import name_keys
from core.logging.logger import get_logger
from .app_services import AppServices


class TagsCommand:
    """Attach local notes (toxic, friendly, notable, duo, weak) to players."""

    def __init__(self, services: AppServices) -> None:
        self.services = services
        self.log = get_logger(__name__, service="tags-cli")

    def _resolve_puuid(self, name_or_puuid: str) -> str | None:
        """Accept a puuid or the name of a player already in the corpus."""
        value = name_or_puuid.strip()
        if not value:
            return None
        row = self.services.store.query_one("SELECT puuid FROM players WHERE puuid = ?", (value,))
        if row:
            return row["puuid"]
        row = self.services.store.query_one(
            """SELECT puuid FROM match_participants
               WHERE name_key = ? AND puuid IS NOT NULL
               ORDER BY id DESC LIMIT 1""",
            (name_keys(value).full,),
        )
        return row["puuid"] if row else None

    def _list(self) -> None:
        tags = self.services.players.get_all_tags()
        if not tags:
            print("No tags yet.", flush=True)
            return
        for tag in tags:
            name = self.services.players.get_player_name(tag.puuid) or tag.puuid
            when = datetime.fromtimestamp(tag.created_at / 1000).strftime("%d/%m/%Y")
            note = f" - {tag.note}" if tag.note else ""
            print(f"- {name}: {tag.category.label}{note} ({when})", flush=True)

    def _ask_category(self) -> TagCategory | None:
        options = ", ".join(t.value for t in TagCategory)
        try:
            return TagCategory.from_string(input(f"Tag ({options}): "))
        except ValueError as e:
            print(str(e), flush=True)
            return None

    def _add(self) -> None:
        puuid = self._resolve_puuid(input("Player (Name#TAG or puuid): "))
        if not puuid:
            print("Player not found in your match history.", flush=True)
            return
        category = self._ask_category()
        if category is None:
            return
        note = input("Note (optional): ").strip() or None
        self.services.players.upsert_tag(puuid, category, note)
        self.log.info(f"tag-set {category.value}")
        print("Tag saved.", flush=True)

    def _remove(self) -> None:
        puuid = self._resolve_puuid(input("Player (Name#TAG or puuid): "))
        if not puuid:
            print("Player not found in your match history.", flush=True)
            return
        category = self._ask_category()
        if category is None:
            return
        removed = self.services.players.delete_tag(puuid, category)
        print("Tag removed." if removed else "Player had no such tag.", flush=True)

    def run(self) -> None:
        while True:
            print("\n=== Player tags ===", flush=True)
            print("1) List tags", flush=True)
            print("2) Tag a player", flush=True)
            print("3) Remove a tag", flush=True)
            print("4) Back", flush=True)
            choice = input("Choose: ").strip()
            if choice == "1":
                self._list()
            elif choice == "2":
                self._add()
            elif choice == "3":
                self._remove()
            elif choice == "4":
                return
            else:
                print("Invalid option.", flush=True)
