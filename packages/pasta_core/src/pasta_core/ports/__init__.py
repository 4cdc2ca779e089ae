from pasta_core.ports.bowl import PastaBowl, PastaWriterHandle

__all__ = [
    "PastaBowl",
    "PastaWriterHandle",
]
