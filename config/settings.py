"""Application settings and configuration."""
import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

ENV_PATH = Path(__file__).resolve().parent / '.env'
load_dotenv(dotenv_path=ENV_PATH)


def _float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


def _int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


class Settings:
    """
    Runtime configuration, read once from the environment (config/.env).

    The configured *user* (stable id, Riot ID, region, API key) is not kept
    here; it lives in the database and is written by the configure command.
    RIOT_API_KEY below is only the fallback used when that row has no key.
    """

    RIOT_API_KEY: str = os.getenv('RIOT_API_KEY', '')

    # ── Rate limits (Riot personal key: 20/s and 100/120s) ───────────────
    RATE_LIMIT_PER_1_SEC: int = _int('RATE_LIMIT_PER_1_SEC', 18)
    RATE_LIMIT_PER_2_MIN: int = _int('RATE_LIMIT_PER_2_MIN', 90)
    # Method limits per endpoint family (Riot defaults for personal keys).
    ACCOUNT_RATE_LIMIT_PER_MIN:  int = _int('ACCOUNT_RATE_LIMIT_PER_MIN', 1000)
    SUMMONER_RATE_LIMIT_PER_MIN: int = _int('SUMMONER_RATE_LIMIT_PER_MIN', 1600)
    MATCH_RATE_LIMIT_PER_10_SEC: int = _int('MATCH_RATE_LIMIT_PER_10_SEC', 2000)

    # ── HTTP ───────────────────────────────────────────────────────────────
    REQUEST_TIMEOUT: int = _int('REQUEST_TIMEOUT', 30)
    MAX_RETRIES:     int = _int('MAX_RETRIES', 3)

    # 429 backoff: base * 2^(attempt-1), never longer than the cap.
    RETRY_BACKOFF_BASE_S: float = _float('RETRY_BACKOFF_BASE_S', 0.5)
    RETRY_BACKOFF_CAP_S:  float = _float('RETRY_BACKOFF_CAP_S', 4.0)

    # ── Match import ─────────────────────────────────────────────────────
    IMPORT_MATCH_COUNT:     int   = _int('IMPORT_MATCH_COUNT', 20)
    IMPORT_REQUEST_DELAY_S: float = _float('IMPORT_REQUEST_DELAY_S', 0.1)
    # Matches that ended after the game currently in progress started are
    # still being imported; summaries ignore anything this recent.
    FRESHNESS_CUTOFF_MINUTES: int = _int('FRESHNESS_CUTOFF_MINUTES', 30)

    # ── Local game client ─────────────────────────────────────────────────
    LCU_POLL_INTERVAL_S: float         = _float('LCU_POLL_INTERVAL_S', 3.0)
    LCU_LOCKFILE:        Optional[str] = os.getenv('LCU_LOCKFILE') or None
    LCU_REQUEST_TIMEOUT: float         = _float('LCU_REQUEST_TIMEOUT', 5.0)

    # ── Paths ──────────────────────────────────────────────────────────────
    BASE_DIR: Path = Path(__file__).resolve().parent.parent
    DATA_DIR: Path = Path(os.getenv('DATA_DIR', str(BASE_DIR / 'data')))
    DB_DIR:   Path = DATA_DIR / 'db'
    LOG_DIR:  Path = DATA_DIR / 'logs'
    DB_FILE:  str  = 'rift-revealer.sqlite'

    LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO')

    @classmethod
    def db_path(cls) -> Path:
        return cls.DB_DIR / cls.DB_FILE

    @classmethod
    def validate(cls) -> None:
        if not cls.RIOT_API_KEY:
            raise ValueError("RIOT_API_KEY must be set in config/.env")

    @classmethod
    def create_directories(cls) -> None:
        cls.DB_DIR.mkdir(parents=True, exist_ok=True)
        cls.LOG_DIR.mkdir(parents=True, exist_ok=True)


settings = Settings()
