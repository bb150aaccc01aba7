from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from vector_store_mcp import __version__

class Settings(BaseSettings):
    # App
    APP_NAME: str = "Vector Store MCP Gateway"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    
    # Upstream API
    OPENAI_API_KEY: str = ""
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"
    OPENAI_BETA_HEADER: str = "assistants=v2"
    
    # MCP
    MCP_PROTOCOL_VERSION: str = "2024-11-05"
    MCP_SERVER_NAME: str = "openai-vector-store-mcp"
    MCP_SERVER_VERSION: str = __version__
    
    # CORS
    CORS_ALLOW_ORIGINS: list[str] = ["*"]
    CORS_MAX_AGE: int = 86400
    
    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

@lru_cache()
def get_settings() -> Settings:
    return Settings()
