"""The bundled asset tree and how request paths resolve against it."""

from roost.assets.mime import type_by_extension
from roost.assets.resolver import AssetResolver, ResolvedAsset, TypedStream
from roost.assets.sniff import detect_content_type
from roost.assets.tree import AssetTree

__all__ = [
    "AssetResolver",
    "AssetTree",
    "ResolvedAsset",
    "TypedStream",
    "detect_content_type",
    "type_by_extension",
]
