"""Tests for importer detection."""

from movienight.importers import (
    detect_importer, detect_importer_by_content, get_all_importers,
)
from movienight.importers.tabular import CsvImporter, TabSeparatedImporter


class TestRegistry:
    def test_builtin_importers_registered(self):
        importers = get_all_importers()
        assert TabSeparatedImporter in importers
        assert CsvImporter in importers

    def test_returns_copy(self):
        get_all_importers().clear()
        assert get_all_importers()


class TestDetectImporter:
    def test_detects_tsv(self):
        assert isinstance(detect_importer("batch.tsv"), TabSeparatedImporter)

    def test_detects_csv(self):
        assert isinstance(detect_importer("https://example.com/export.csv"), CsvImporter)

    def test_unknown_extension(self):
        assert detect_importer("films.xlsx") is None


class TestDetectImporterByContent:
    def test_detects_tab_separated(self, tsv_batch):
        assert isinstance(detect_importer_by_content(tsv_batch, ""), TabSeparatedImporter)

    def test_returns_none_for_plain_text(self):
        assert detect_importer_by_content(b"just one film", "") is None

    def test_returns_none_for_empty_content(self):
        assert detect_importer_by_content(b"", "") is None
