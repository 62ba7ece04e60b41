"""HTTP API for the speech metrics engine.

RULES:
- The app lives in server.app; request/response schemas in server.models
- Endpoints never duplicate engine logic; they call core.analyzer
"""
