"""Application settings loaded from environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Engine configuration from environment variables."""

    default_tax_year: int = 2025
    rates_file: str = "rates.yaml"
    holidays_file: str = "holidays.yaml"
    # Income tax is settled annually by the bookkeeper, not withheld monthly.
    withhold_income_tax: bool = False
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
