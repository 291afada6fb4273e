from __future__ import annotations

from pathlib import Path

import esprima
from esprima.error_handler import Error as EsprimaError

from apiscout.extractors.base import ParseOutcome, SourceParser
from apiscout.utils.exceptions import UntypedParseError
from apiscout.utils.logger import get_logger

logger = get_logger(name=__name__)


class JavaScriptParser(SourceParser):
    """
    Tolerant JavaScript parser built on esprima.

    Parses as a classic script first (what most route files still are) and
    retries as an ES module when the script grammar rejects import/export.
    Never raises on bad syntax: the error comes back on the ParseOutcome.
    The tree is esprima's ESTree output converted with toDict(), with `loc`
    enabled so nodes carry line numbers.
    """

    dialect = "javascript"
    extension = ".js"

    def parse(self, source: str, path: Path) -> ParseOutcome:
        try:
            program = esprima.parseScript(source, tolerant=True, loc=True)
        except (EsprimaError, RecursionError) as script_error:
            try:
                program = esprima.parseModule(source, tolerant=True, loc=True)
            except (EsprimaError, RecursionError):
                return ParseOutcome(tree=None, error=UntypedParseError(path, str(script_error)))

        # tolerated errors are kept on the Program node; they are not part of the tree
        tolerated = getattr(program, "errors", None)
        if tolerated:
            logger.debug("%s: %d tolerated syntax error(s)", path, len(tolerated))
            program.errors = None

        # toDict() recurses once per nesting level
        try:
            tree = program.toDict()
        except RecursionError:
            return ParseOutcome(tree=None, error=UntypedParseError(path, "nesting too deep"))
        return ParseOutcome(tree=tree)
