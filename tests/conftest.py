"""Shared fixtures for java_lens tests."""

import pytest

from java_lens.indexer import JavaIndexer
from java_lens.parser import JavaParser


@pytest.fixture(scope="session")
def java_parser():
    return JavaParser()


@pytest.fixture
def indexer(java_parser):
    return JavaIndexer(parser=java_parser)


@pytest.fixture
def analyze(indexer):
    """Analyze a source string, falling back to class name "Fallback"."""

    def _analyze(source, fallback="Fallback"):
        return indexer.analyze(source, fallback)

    return _analyze
