from pasta_core.models.entities import Pasta

__all__ = ["Pasta"]
