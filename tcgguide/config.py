from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    debug: bool = False

    pokemon_tcg_api_key: str = ""

    cards_api_url: str = "https://api.pokemontcg.io/v2/cards"
    sets_api_url: str = "https://api.pokemontcg.io/v2/sets"

    page_size: int = 50
    order_by: str = "name"

    # None disables the client-side timeout; a hung request stays in flight
    request_timeout: float | None = None

    database_url: str = "sqlite+aiosqlite:///tcgguide.db"

    favorites_key: str = "favorites"


settings = Settings()
