from dataclasses import dataclass


@dataclass(frozen=True)
class BlobEntry:
    """One object in the blob namespace: its full key and a URL its content can be fetched from."""

    key: str
    url: str
