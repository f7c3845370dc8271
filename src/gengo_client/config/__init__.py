from .gengo import DEFAULT_TIMEOUT_SECONDS, GengoSettings, load_gengo_settings

__all__ = ["DEFAULT_TIMEOUT_SECONDS", "GengoSettings", "load_gengo_settings"]
