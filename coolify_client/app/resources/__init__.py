"""
Resources package.

Wire models for Coolify payloads and the per-resource client the bot
layer calls into. Keep methods thin: caching, version fallback and
pagination all live in their own packages.
"""

from .client import CoolifyClient, CachedValue
from .models import (
    Application,
    ApplicationDetail,
    ApplicationLogs,
    Database,
    DeleteResponse,
    Deployment,
    Environment,
    EnvironmentVariable,
    MessageResponse,
    StartDeploymentResponse,
    StopResponse,
)

__all__ = [
    "CoolifyClient",
    "CachedValue",
    "Application",
    "ApplicationDetail",
    "ApplicationLogs",
    "Database",
    "DeleteResponse",
    "Deployment",
    "Environment",
    "EnvironmentVariable",
    "MessageResponse",
    "StartDeploymentResponse",
    "StopResponse",
]
