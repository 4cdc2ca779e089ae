from pastad.config.settings import Settings

__all__ = ["Settings"]
