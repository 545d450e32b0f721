"""
Coolify client package.

Talks to the Coolify deployment-management REST API on behalf of the bot
layer, adding:
- API version fallback with pinning of the first version that answers
- A TTL response cache with prefix invalidation after mutations
- Pagination reconciliation across legacy response shapes

Structure:
- app.caching: In-memory TTL cache.
- app.pagination: Envelope decoding and page-number derivation.
- app.transport: Version-fallback request executor over httpx.
- app.resources: Wire models and the per-resource client.
- app.factory: Builds a client from ClientSettings.
"""
