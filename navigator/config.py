from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import SecretStr


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8')

    # Telegram Bot Token
    BOT_TOKEN: SecretStr

    LOG_LEVEL: str = "INFO"

    # --- Wizard Settings ---
    CATALOG_PATH: str | None = None # JSON step catalog replacing the built-in one
    EXPORT_FILENAME: str = "data-reuse-summary.txt"

    # --- Webhook Settings ---
    WEBHOOK_HOST: str | None = None
    WEBHOOK_PATH: str = "/webhook/bot"
    WEB_SERVER_HOST: str = "0.0.0.0"
    WEB_SERVER_PORT: int = 8080

    @property
    def webhook_url(self) -> str | None:
        if not self.WEBHOOK_HOST:
            return None
        return f"{self.WEBHOOK_HOST}{self.WEBHOOK_PATH}"

# Create a single instance of the settings
settings = Settings()
