# core/config_validator.py

from typing import List
from core.config import settings
from core.logging_config import logger


def validate_required_config() -> List[str]:
    """
    Validate that all required environment variables are set.
    Returns list of missing required variables.
    """
    missing = []

    # Row store + auth
    if not settings.SUPABASE_URL:
        missing.append("SUPABASE_URL")
    if not settings.SUPABASE_SERVICE_ROLE_KEY:
        missing.append("SUPABASE_SERVICE_ROLE_KEY")

    # Object store
    if not settings.AWS_BUCKET_NAME:
        missing.append("AWS_BUCKET_NAME")

    return missing


def validate_optional_config() -> List[str]:
    """
    Validate optional but recommended configuration.
    Returns list of missing optional variables (warnings only).
    """
    warnings = []

    if not settings.SUPABASE_JWT_SECRET:
        warnings.append("SUPABASE_JWT_SECRET (tokens will be verified remotely on every request)")
    if not settings.AWS_ACCESS_KEY_ID or not settings.AWS_SECRET_ACCESS_KEY:
        warnings.append("AWS_ACCESS_KEY_ID / AWS_SECRET_ACCESS_KEY (falling back to the default boto3 credential chain)")

    return warnings


def validate_config_on_startup():
    """
    Validate configuration on application startup.
    Raises RuntimeError in production if critical config is missing;
    elsewhere the gaps are only logged so local runs and tests can boot.
    """
    missing_required = validate_required_config()
    missing_optional = validate_optional_config()

    if missing_required:
        error_msg = f"Missing required environment variables: {', '.join(missing_required)}"
        if settings.ENV == "production":
            logger.error(error_msg)
            raise RuntimeError(error_msg)
        logger.warning(error_msg)

    for warning in missing_optional:
        logger.warning(f"Optional configuration missing: {warning}")

    if not missing_required:
        logger.info("Configuration validation passed")
