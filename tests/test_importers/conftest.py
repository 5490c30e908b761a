"""Shared fixtures for importer tests."""

import pytest


@pytest.fixture
def tsv_batch():
    """A batch as copied out of a spreadsheet, with a ragged last row."""
    return (
        "Matrix\thttps://www.csfd.cz/film/9499\tPepa\tMust see!\n"
        "\n"
        "Alien\thttps://www.csfd.cz/film/1\t\t\n"
        "   \n"
        "Heat\n"
    ).encode("utf-8")


@pytest.fixture
def csv_batch():
    return (
        "title,link,nominator,comment\n"
        "Matrix,https://www.csfd.cz/film/9499,Pepa,\"Must see, twice\"\n"
        ",,,\n"
        "Heat,,,\n"
    ).encode("utf-8")
