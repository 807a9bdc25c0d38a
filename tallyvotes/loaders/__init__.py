"""Loaders for contest and vote datasets."""

from .base import DatasetError, DatasetLoader

# Loader registry - import loaders here to register them
_loaders: list[type[DatasetLoader]] = []


def register_loader(loader_class: type[DatasetLoader]) -> type[DatasetLoader]:
    """Decorator to register a loader class."""
    _loaders.append(loader_class)
    return loader_class


def get_all_loaders() -> list[type[DatasetLoader]]:
    """Return all registered loader classes."""
    return _loaders.copy()


def get_loader(name: str) -> DatasetLoader:
    """Return a loader instance for the named format.

    Raises:
        DatasetError: If no registered loader has that name
    """
    for loader_class in _loaders:
        loader = loader_class()
        if loader.name == name:
            return loader
    raise DatasetError(f"Unsupported format: {name}")


def detect_loader(source: str) -> DatasetLoader | None:
    """Auto-detect a loader from the file extension of a path or URL."""
    for loader_class in _loaders:
        loader = loader_class()
        if loader.can_load(source):
            return loader
    return None


def detect_loader_by_content(content: bytes, source: str) -> DatasetLoader | None:
    """Auto-detect a loader by inspecting the dataset content."""
    for loader_class in _loaders:
        loader = loader_class()
        if loader.can_load_content(content, source):
            return loader
    return None
