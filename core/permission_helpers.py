from fastapi import Depends

from dependencies.auth import get_current_user, SessionContext
from core.errors import AuthorizationError
from core.permissions import CAPABILITIES, capabilities_for
from models.enums import Feature


# -----------------------------------------------------
# Permission evaluation
# -----------------------------------------------------
def has_capability(ctx: SessionContext, feature: Feature | str, capability: str) -> bool:
    if capability not in CAPABILITIES:
        return False
    return capabilities_for(ctx.role, feature).allows(capability)


def require_capability(ctx: SessionContext, feature: Feature | str, capability: str):
    """Raise AuthorizationError (detail is always 'Not permitted')."""
    if not has_capability(ctx, feature, capability):
        raise AuthorizationError()


def has_any_capability(ctx: SessionContext, checks: list[tuple[Feature, str]]) -> bool:
    return any(has_capability(ctx, feature, capability) for feature, capability in checks)


# -----------------------------------------------------
# FastAPI dependency wrappers
# -----------------------------------------------------
def requires_capability(feature: Feature | str, capability: str):
    """
    Usage:
        @router.post("/", dependencies=[Depends(requires_capability(Feature.announcements, CREATE))])

    Runs before the request body is validated, so a caller without the
    capability gets 403 whatever they sent.
    """

    def dependency(ctx: SessionContext = Depends(get_current_user)):
        require_capability(ctx, feature, capability)
        return ctx

    return dependency


def requires_any_capability(checks: list[tuple[Feature, str]]):
    def dependency(ctx: SessionContext = Depends(get_current_user)):
        if not has_any_capability(ctx, checks):
            raise AuthorizationError()
        return ctx

    return dependency
