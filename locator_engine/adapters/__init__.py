"""Infrastructure adapter exports."""

from .class_resolver import ImportClassResolver, MappingClassResolver
from .definition_file import load_definitions_file

__all__ = [
    "ImportClassResolver",
    "MappingClassResolver",
    "load_definitions_file",
]
