from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Application settings
    APP_NAME: str = "Time Clock"
    APP_VERSION: str = "1.0.0"

    # Database URL (read from .env file)
    DATABASE_URL: str = ''

    # JWT Authentication settings
    JWT_SECRET_KEY: str = 'default-secret-key-change-in-production'
    JWT_ALGORITHM: str = 'HS256'
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Client URL for CORS
    CLIENT_URL: str = 'http://localhost:3000'

    # IANA zone name used for week/month windows; empty means server local time
    TIMEZONE: str = ''

    # Time entry history paging
    HISTORY_DEFAULT_LIMIT: int = 50
    HISTORY_MAX_LIMIT: int = 500

    LOG_LEVEL: str = 'INFO'

    # Admin account created on first startup
    INITIAL_ADMIN_EMAIL: str = 'admin@example.com'
    INITIAL_ADMIN_FIRST_NAME: str = 'System'
    INITIAL_ADMIN_LAST_NAME: str = 'Administrator'

    model_config = SettingsConfigDict(env_file=".env", extra='allow')

    @property
    def DB_URL(self):
        if self.ENV_MODE == "dev":
            return self.DEV_DB_URL
        else:
            if self.DATABASE_URL:
                return self.DATABASE_URL
            else:
                return '{}://{}:{}@{}:{}/{}'.format(
                    self.DB_ENGINE,
                    self.DB_USERNAME,
                    self.DB_PASS,
                    self.DB_HOST,
                    self.DB_PORT,
                    self.DB_NAME
                )

class DevSettings(Settings):
    # Environment mode: 'dev' or 'prod'
    ENV_MODE: str = 'dev'

    @property
    def DEV_DB_URL(self) -> str:
        # Fall back to a local SQLite file when DATABASE_URL is not set
        return self.DATABASE_URL if self.DATABASE_URL else "sqlite:///./dev.db"

    model_config = SettingsConfigDict(env_file=".env", extra='allow')

class ProdSettings(Settings):
    # Environment mode: 'dev' or 'prod'
    ENV_MODE: str = 'prod'

    # Database settings for production
    DB_ENGINE: str = 'postgresql+psycopg'
    DB_USERNAME: str = ''
    DB_PASS: str = ''
    DB_HOST: str = ''
    DB_PORT: str = '5432'
    DB_NAME: str = ''

    model_config = SettingsConfigDict(env_file=".env", extra='allow')

def get_settings(env_mode: str = "dev"):
    if env_mode == "dev":
        return DevSettings()
    return ProdSettings()
