"""
Shared utilities for the Coolify access client.

This package aggregates common building blocks consumed by the client:

- config: Client configuration via pydantic-settings
- logging: Structured logging with request correlation
- metrics: Prometheus metrics helpers
- errors: Canonical error types and responses

Any cross-package logic should live here to avoid import cycles. Do not
import from coolify_client into shared/.
"""
