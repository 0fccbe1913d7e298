from mediacatalog.models.media import MediaLot, MediaSource, MetadataImageLot

__all__ = [
    "MediaLot",
    "MediaSource",
    "MetadataImageLot",
]
