"""Abstract base class for dataset loaders."""

from abc import ABC, abstractmethod
from pathlib import PurePosixPath
from urllib.parse import urlparse

from tallyvotes.models import Contest, Vote


class DatasetError(ValueError):
    """Raised when a contest or vote dataset cannot be decoded."""
    pass


def source_suffix(source: str) -> str:
    """Lower-cased file extension of a path or URL, ignoring any query string."""
    path = urlparse(source).path if "://" in source else source
    return PurePosixPath(path.replace("\\", "/")).suffix.lower()


class DatasetLoader(ABC):
    """Abstract base class for decoding contest and vote datasets.

    Each loader implementation handles one file format. Loaders are
    registered via the @register_loader decorator in
    tallyvotes/loaders/__init__.py.
    """

    #: File extensions (with leading dot) this loader claims
    SUFFIXES: tuple[str, ...] = ()

    @property
    @abstractmethod
    def name(self) -> str:
        """Format name, as accepted by --format."""
        pass

    def can_load(self, source: str) -> bool:
        """Check if this loader handles the given path or URL by its extension."""
        return source_suffix(source) in self.SUFFIXES

    def can_load_content(self, content: bytes, source: str) -> bool:
        """Check if this loader can likely handle the given content.

        Used when the source name does not tell the format apart.
        Subclasses should override this to look for tell-tale signs of
        their format.
        """
        return False

    @abstractmethod
    def load_contests(self, source: str, content: bytes) -> list[Contest]:
        """Decode a contest definition set.

        Args:
            source: Original path or URL (for error messages)
            content: Raw bytes of the dataset

        Raises:
            DatasetError: If the content cannot be decoded
        """
        pass

    @abstractmethod
    def load_votes(self, source: str, content: bytes) -> list[Vote]:
        """Decode a vote set.

        Raises:
            DatasetError: If the content cannot be decoded
        """
        pass
