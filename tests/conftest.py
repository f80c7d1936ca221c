from __future__ import annotations

import logging
from pathlib import Path
from types import ModuleType
from typing import Iterator

import pytest

from cmdletdoc.comments import XmlDocIndex
from cmdletdoc.engine import load_module
from tests._fixtures.module_builder import ModuleBuilder

FIXTURES = Path(__file__).parent / "_fixtures"
SAMPLE_MODULE = FIXTURES / "sample_cmdlets.py"
SAMPLE_DOC_COMMENTS = FIXTURES / "sample_cmdlets.xml"


def _reset_logger() -> None:
    logger = logging.getLogger("cmdletdoc")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture(autouse=True)
def reset_cmdletdoc_logger() -> Iterator[None]:
    """Undo configure_logging so caplog sees records in every test."""
    _reset_logger()
    yield
    _reset_logger()


@pytest.fixture
def module_builder(tmp_path: Path) -> ModuleBuilder:
    """Provide a module builder rooted at the pytest tmp_path."""
    return ModuleBuilder(tmp_path)


@pytest.fixture
def sample_module() -> ModuleType:
    """The sample command module, loaded as ``sample_cmdlets``."""
    return load_module(SAMPLE_MODULE)


@pytest.fixture
def sample_index() -> XmlDocIndex:
    return XmlDocIndex.load(SAMPLE_DOC_COMMENTS)


@pytest.fixture
def sample_module_path() -> Path:
    return SAMPLE_MODULE


@pytest.fixture
def sample_doc_comments_path() -> Path:
    return SAMPLE_DOC_COMMENTS
