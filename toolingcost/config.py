from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "toolingcost"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "*"  # comma-separated

    # Standard steel (45#, Q235, Q345) in g/cm³, used when a material has no density
    DEFAULT_DENSITY: float = 7.85

    # Rounding happens once, when a ComputedCost is assembled
    WEIGHT_DECIMALS: int = 3
    PRICE_DECIMALS: int = 2

    class Config:
        env_file = ".env"


settings = Settings()
