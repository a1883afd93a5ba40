from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="LOOTROLL_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Fixed seed for the default draw function. Leave unset for real randomness.
    roll_seed: int | None = None

    # Column labels used when a brand-new table is created.
    roll_column_label: str = "Roll"
    name_column_label: str = "Item"
    weight_column_label: str = "Weight"


settings = Settings()
