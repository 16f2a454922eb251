from pathlib import Path
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# -------------------------------------------------
# Explicitly load .env (CRITICAL)
# -------------------------------------------------

BASE_DIR = Path(__file__).resolve().parent.parent.parent
ENV_PATH = BASE_DIR / ".env"

load_dotenv(dotenv_path=ENV_PATH)


class Settings(BaseSettings):
    DATABASE_URL: str
    ENVIRONMENT: str = "development"

    # Server settings
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Routes are mounted under this prefix ("" keeps the public paths as /veiculos, /clientes, ...)
    API_PREFIX: str = ""

    LOG_LEVEL: str = Field(default="INFO", description="Root logging level")
    SQL_ECHO: bool = Field(default=False, description="Echo SQL statements issued by the engine")
    AUTO_CREATE_TABLES: bool = Field(default=True, description="Create vehicle/client/rental tables on startup")

    # S3 for vehicle images (optional; leave S3_BUCKET_NAME empty to disable uploads)
    AWS_ACCESS_KEY_ID: str | None = None
    AWS_SECRET_ACCESS_KEY: str | None = None
    AWS_REGION: str = "us-east-1"
    S3_ENDPOINT_URL: str | None = Field(default=None, description="Custom endpoint (MinIO, LocalStack)")
    S3_BUCKET_NAME: str = Field(default="", validation_alias=AliasChoices("S3_BUCKET_NAME", "BLOB_CONTAINER"))
    S3_VEHICLE_IMAGE_PREFIX: str = "veiculos"
    S3_PUBLIC_BASE_URL: str = Field(default="", description="Base URL for uploaded objects; derived from bucket/region when empty")

    class Config:
        extra = "ignore"
        env_file = str(ENV_PATH)
        env_file_encoding = "utf-8"


settings = Settings()
