from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    products_api_url: str = Field("http://127.0.0.1:8000/api/products")
    products_api_timeout: float = Field(10.0, gt=0)
    serve_mock_api: bool = True
    database_url: str = "sqlite:///./products.db"
    page_session_idle_seconds: int = 3600

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
