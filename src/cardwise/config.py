from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    card_file: str = "data/cards/sample_cards.json"
    preferences_file: str = "data/preferences.json"

    telegram_bot_token: str = ""

    max_query_length: int = 500
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
