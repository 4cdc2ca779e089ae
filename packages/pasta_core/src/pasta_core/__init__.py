from pasta_core.models import Pasta

__all__ = ["Pasta"]
