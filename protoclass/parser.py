"""Tree-Sitter Parsing Layer."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from .errors import UnparseableSourceError
from .syntax_tree import SyntaxTree
from . import constants

logger = logging.getLogger(__name__)


class ParserFactory(ABC):
    """Abstract factory for obtaining a language parser."""

    @abstractmethod
    def get_parser(self, language: str): ...


class TreeSitterParserFactory(ParserFactory):
    """Concrete factory that delegates to tree-sitter-language-pack."""

    def get_parser(self, language: str):
        import tree_sitter_language_pack as tslp

        return tslp.get_parser(language)


class Parser:
    """Parses JavaScript source text into a :class:`SyntaxTree`."""

    def __init__(self, parser_factory: ParserFactory):
        self._factory = parser_factory

    def parse(self, source: str, *, allow_errors: bool = True) -> SyntaxTree:
        """Parse *source*.

        tree-sitter always produces a tree; with ``allow_errors=False`` a
        tree containing ERROR or MISSING nodes raises
        ``UnparseableSourceError`` instead of being returned.
        """
        parser = self._factory.get_parser(constants.LANGUAGE)
        encoded = source.encode("utf-8")
        tree = parser.parse(encoded)
        if tree.root_node.has_error:
            if not allow_errors:
                raise UnparseableSourceError("source contains syntax errors")
            logger.debug("Parse tree contains syntax errors")
        return SyntaxTree(tree, encoded, parser)
