"""Classification service."""

from .service import NO_THREATS_DESCRIPTION, VERIFIED_SAFE_DESCRIPTION, ClassificationService

__all__ = ["ClassificationService", "NO_THREATS_DESCRIPTION", "VERIFIED_SAFE_DESCRIPTION"]
