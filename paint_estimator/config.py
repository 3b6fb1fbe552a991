from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./estimates.db"
    COMPANY_NAME: str = "Paint Estimator"

    # Cost rollup: line item totals are split into materials/labor by ratio,
    # then overhead and profit are charged on the labor share.
    MATERIALS_RATIO: float = 0.30
    OVERHEAD_RATE: float = 0.30     # 30% of labor (15% of total price)
    PROFIT_RATE: float = 0.40       # 40% of labor (20% of total price)
    TAX_RATE: float = 0.0

    ESTIMATE_VALID_DAYS: int = 30

    # Quantity assumptions
    EAVE_WIDTH_FT: float = 2.0
    HIGH_WALL_THRESHOLD_FT: float = 10.0
    CABINET_CONVERSION_SURCHARGE: float = 0.50

    class Config:
        env_file = ".env"


settings = Settings()
