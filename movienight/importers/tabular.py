"""Tab-separated and comma-separated nomination batches."""

import csv
import io

from movienight.importers import register_importer
from movienight.importers.base import NominationImporter, NominationRow


@register_importer
class TabSeparatedImporter(NominationImporter):
    """One nomination per line, fields separated by tabs.

    This is what a spreadsheet puts on the clipboard when rows are copied:

        Matrix<TAB>https://www.csfd.cz/film/9499<TAB>Pepa<TAB>Must see!

    Columns: title, link, nominator, comment. Only the title is required;
    lines with fewer columns get defaults for the rest.
    """

    EXTENSIONS = (".tsv", ".txt", ".tab")

    @property
    def name(self) -> str:
        return "Tab-separated"

    def can_import_content(self, content: bytes, source: str) -> bool:
        """Tell-tale sign: at least one line contains a tab."""
        try:
            text = self.decode(content)
        except ValueError:
            return False
        return any("\t" in line for line in text.splitlines())

    def parse(self, content: bytes | str) -> list[NominationRow]:
        text = self.decode(content)
        rows = []
        for line in text.splitlines():
            if not line.strip():
                continue
            rows.append(NominationRow.from_fields(line.split("\t")))
        return rows


@register_importer
class CsvImporter(NominationImporter):
    """Comma-separated nominations with the same columns as the TSV layout.

    A first non-blank row starting with a "title" header is skipped.
    """

    EXTENSIONS = (".csv",)

    @property
    def name(self) -> str:
        return "CSV"

    def parse(self, content: bytes | str) -> list[NominationRow]:
        text = self.decode(content)
        rows = []
        seen_content = False
        for fields in csv.reader(io.StringIO(text)):
            if not any(f.strip() for f in fields):
                continue
            first_row = not seen_content
            seen_content = True
            if first_row and fields[0].strip().lower() == "title":
                continue
            rows.append(NominationRow.from_fields(fields))
        return rows
