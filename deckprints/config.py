from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "DeckPrints"
    debug: bool = False

    database_url: str = "sqlite+aiosqlite:///./deckprints.db"

    scryfall_api_url: str = "https://api.scryfall.com"
    scryfall_user_agent: str = "DeckPrints/1.0"

    # Seconds. Scryfall asks for 50-100ms between requests.
    request_timeout: float = 30.0
    request_delay: float = 0.1

    # Deck sessions kept in memory; least recently used are dropped first
    max_sessions: int = 1000


settings = Settings()


# =============================================================================
# SET TYPE FILTER
# =============================================================================

# Used when no selection has been persisted yet
DEFAULT_SET_TYPES: tuple[str, ...] = (
    "expansion",
    "core",
    "commander",
    "duel_deck",
    "starter",
    "planechase",
    "premium_deck",
    "from_the_vault",
    "masters",
    "memorabilia",
    "box",
    "spellbook",
    "alchemy",
    "archenemy",
    "draft_innovation",
)

SELECTED_SET_TYPES_KEY = "selected_set_types"
