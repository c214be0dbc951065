import os

SETTINGS_MODULES = {
    "development": "config.development",
    "dev": "config.development",
    "production": "config.production",
    "prod": "config.production",
    "testing": "config.testing",
    "test": "config.testing",
}


def get_settings_module() -> str:
    """Dotted path of the settings module to load.

    TIMEKEEPING_SETTINGS names a module directly (e.g. a deployment's own
    settings); otherwise APP_ENV picks one of the bundled modules. Unknown
    APP_ENV values fall back to development.
    """
    explicit = os.getenv("TIMEKEEPING_SETTINGS", "").strip()
    if explicit:
        return explicit

    env = os.getenv("APP_ENV", "development").strip().lower()
    return SETTINGS_MODULES.get(env, "config.development")
