from ethics_engine.screening.client import (
    HttpScreeningClient,
    ScreeningLookup,
    ScreeningMatch,
    StaticScreeningLookup,
)

__all__ = [
    "HttpScreeningClient",
    "ScreeningLookup",
    "ScreeningMatch",
    "StaticScreeningLookup",
]
