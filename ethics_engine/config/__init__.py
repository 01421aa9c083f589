from ethics_engine.config.settings import ApiConfig, EngineConfig, ScreeningConfig, Settings

__all__ = [
    "ApiConfig",
    "EngineConfig",
    "ScreeningConfig",
    "Settings",
]
