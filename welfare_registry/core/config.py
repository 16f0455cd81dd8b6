from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_env: str = "dev"
    root_path: str = ""
    log_level: str = "INFO"
    sql_echo: bool = False

    postgres_db: str = "welfare_registry"
    postgres_user: str = "welfare_user"
    postgres_password: str = "welfare_pass"
    postgres_host: str = "db"
    postgres_port: int = 5432

    # Full SQLAlchemy URL; takes precedence over the postgres_* parts when set.
    database_url_override: str = ""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql+psycopg2://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )


settings = Settings()
