"""Abstract base class for nomination importers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

DEFAULT_TITLE = "Unknown film"
DEFAULT_NOMINATOR = "Admin import"


class NominationImportError(ValueError):
    """Raised when a batch of nominations cannot be read."""
    pass


@dataclass
class NominationRow:
    """One nomination read from a batch.

    Attributes:
        title: Film title
        link: Link to a film database page (may be empty)
        nominator: Name credited as nominator
        comment: Note attached to the nomination (may be empty)
    """
    title: str = DEFAULT_TITLE
    link: str = ""
    nominator: str = DEFAULT_NOMINATOR
    comment: str = ""

    @classmethod
    def from_fields(cls, fields: list[str]) -> "NominationRow":
        """Build a row from positional fields: title, link, nominator, comment.

        Missing or blank fields take their defaults.
        """
        values = [f.strip() for f in fields] + [""] * 4
        title, link, nominator, comment = values[:4]
        return cls(
            title=title or DEFAULT_TITLE,
            link=link,
            nominator=nominator or DEFAULT_NOMINATOR,
            comment=comment,
        )


class NominationImporter(ABC):
    """Abstract base class for reading nomination batches.

    Each importer handles one text layout. Importers are registered via the
    @register_importer decorator in movienight/importers/__init__.py.
    """

    EXTENSIONS: tuple[str, ...] = ()

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of the format."""
        pass

    def can_import(self, source: str) -> bool:
        """Check if this importer handles the given filename or URL by its extension."""
        path = source.lower().split("?", 1)[0]
        return any(path.endswith(ext) for ext in self.EXTENSIONS)

    def can_import_content(self, content: bytes, source: str) -> bool:
        """Check if the content looks like this importer's format.

        Used for pasted text where there is no filename to match against.
        """
        return False

    @staticmethod
    def decode(content: bytes | str) -> str:
        if isinstance(content, str):
            return content
        try:
            return content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise NominationImportError(f"Nomination batch is not valid UTF-8 text: {e}") from e

    @abstractmethod
    def parse(self, content: bytes | str) -> list[NominationRow]:
        """Parse the content into nomination rows, skipping blank lines.

        Raises:
            NominationImportError: If the content cannot be read
        """
        pass
