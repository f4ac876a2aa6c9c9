from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./packaging.db"
    COMPANY_NAME: str = "Packaging Configurator"
    LOG_LEVEL: str = "INFO"
    CURRENCY_SYMBOL: str = ""  # costs are unitless unless set, e.g. "$" or "EUR "

    # Defaults used when a product has no saved configuration
    DEFAULT_PALLET_WIDTH: float = 1200.0   # mm
    DEFAULT_PALLET_LENGTH: float = 800.0   # mm
    DEFAULT_PALLET_MAX_HEIGHT: float = 1800.0  # mm
    DEFAULT_PRODUCTION_SPEED: float = 100.0  # units per working day
    DEFAULT_WORKING_DAYS: int = 5

    # Standard truck bed
    TRUCK_WIDTH: float = 2400.0   # mm
    TRUCK_LENGTH: float = 6000.0  # mm

    class Config:
        env_file = ".env"


settings = Settings()
