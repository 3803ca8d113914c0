"""Names, C++ member models, their rendering as text, and field layout helpers."""

__version__ = "0.1.0"

__all__ = [
    "name_components",
    "cpp_name_components",
    "members",
    "methods",
    "writer",
    "serialize",
    "field_layout",
    "field_accessors",
]