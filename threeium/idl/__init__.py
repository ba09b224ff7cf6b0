from .loader import AnchorIdl, load_idl_from_file, load_idl_from_url, validate_anchor_idl

__all__ = [
    "AnchorIdl",
    "load_idl_from_file",
    "load_idl_from_url",
    "validate_anchor_idl",
]
