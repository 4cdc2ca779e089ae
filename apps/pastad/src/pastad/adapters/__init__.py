from pastad.adapters.bowl import BLOB_FILE, METADATA_FILE, DirectoryBowl, PastaWriter

__all__ = [
    "BLOB_FILE",
    "METADATA_FILE",
    "DirectoryBowl",
    "PastaWriter",
]
