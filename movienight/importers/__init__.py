"""Importers for batches of nominations pasted or uploaded by the administrator."""

from .base import NominationImporter

# Importer registry - import importers here to register them
_importers: list[type[NominationImporter]] = []


def register_importer(importer_class: type[NominationImporter]) -> type[NominationImporter]:
    """Decorator to register an importer class."""
    _importers.append(importer_class)
    return importer_class


def get_all_importers() -> list[type[NominationImporter]]:
    """Return all registered importer classes."""
    return _importers.copy()


def detect_importer(source: str) -> NominationImporter | None:
    """Return an importer instance for the given filename or URL, if any."""
    for importer_class in _importers:
        importer = importer_class()
        if importer.can_import(source):
            return importer
    return None


def detect_importer_by_content(content: bytes, source: str = "") -> NominationImporter | None:
    """Return an importer instance that recognises the content, if any."""
    for importer_class in _importers:
        importer = importer_class()
        if importer.can_import_content(content, source):
            return importer
    return None


# Register the built-in importers
from . import tabular  # noqa: E402,F401
