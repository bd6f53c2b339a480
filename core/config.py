from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # -------------------------------------------------
    # General
    # -------------------------------------------------
    PROJECT_NAME: str = "Ecole Portal API"
    ENV: str = "development"

    # -------------------------------------------------
    # Frontend Domains
    # -------------------------------------------------
    FRONTEND_DOMAIN: Optional[str] = Field(None, env="FRONTEND_DOMAIN")

    PORTAL_DOMAINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:8080",
    ]

    # -------------------------------------------------
    # CORS (auto-built below)
    # -------------------------------------------------
    BACKEND_CORS_ORIGINS: List[str] = []

    # -------------------------------------------------
    # Supabase (Row Store & Auth)
    # -------------------------------------------------
    SUPABASE_URL: Optional[str] = Field(None, env="SUPABASE_URL")
    SUPABASE_ANON_KEY: Optional[str] = Field(None, env="SUPABASE_ANON_KEY")
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = Field(None, env="SUPABASE_SERVICE_ROLE_KEY")
    SUPABASE_JWT_SECRET: Optional[str] = Field(None, env="SUPABASE_JWT_SECRET")

    # -------------------------------------------------
    # S3 (Object Store for imported documents)
    # -------------------------------------------------
    AWS_ACCESS_KEY_ID: Optional[str] = Field(None, env="AWS_ACCESS_KEY_ID")
    AWS_SECRET_ACCESS_KEY: Optional[str] = Field(None, env="AWS_SECRET_ACCESS_KEY")
    AWS_BUCKET_NAME: Optional[str] = Field(None, env="AWS_BUCKET_NAME")
    AWS_REGION: str = Field("eu-west-3", env="AWS_REGION")

    # -------------------------------------------------
    # Listing windows
    # -------------------------------------------------
    DEFAULT_LIST_LIMIT: int = Field(20, env="DEFAULT_LIST_LIMIT", description="Rows returned by a panel list when no limit is given")
    MAX_LIST_LIMIT: int = Field(100, env="MAX_LIST_LIMIT", description="Upper bound for a caller-supplied limit")

    # -------------------------------------------------
    # Uploads
    # -------------------------------------------------
    UPLOAD_MAX_BYTES: int = Field(10 * 1024 * 1024, env="UPLOAD_MAX_BYTES", description="Maximum imported document size (default: 10 MB)")

    # -------------------------------------------------
    # Orphan sweep (background reconciliation of uploads)
    # -------------------------------------------------
    ENABLE_SCHEDULER: bool = Field(False, env="ENABLE_SCHEDULER")
    ORPHAN_GRACE_MINUTES: int = Field(60, env="ORPHAN_GRACE_MINUTES", description="Objects younger than this are never swept")
    ORPHAN_SWEEP_INTERVAL_MINUTES: int = Field(30, env="ORPHAN_SWEEP_INTERVAL_MINUTES")

    # -------------------------------------------------
    # Model Config
    # -------------------------------------------------
    class Config:
        case_sensitive = True


# Instantiate settings
settings = Settings()

# -------------------------------------------------
# Build CORS list dynamically after loading settings
# -------------------------------------------------
cors_origins = []

# 1) add the deployed frontend domain
if settings.FRONTEND_DOMAIN:
    domain = settings.FRONTEND_DOMAIN
    if not domain.startswith("http"):
        domain = f"https://{domain}"
    cors_origins.append(domain.rstrip("/"))

# 2) add local portal domains
cors_origins.extend([d.rstrip("/") for d in settings.PORTAL_DOMAINS])

# 3) remove duplicates
settings.BACKEND_CORS_ORIGINS = sorted(list(set(cors_origins)))
