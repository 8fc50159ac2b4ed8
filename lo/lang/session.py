"""Session control for the lo language: runs source text through scan -> parse -> interpret, either once for a file or
once per line in command-line mode.
"""

from dataclasses import dataclass, field
from typing import List

from lo.core import syntax
from lo.core.evaluator import Evaluator
from lo.core.parser import Parser
from lo.core.scanner import Scanner
from lo.lang.error import EX_DATAERR, EX_NOINPUT, EX_SOFTWARE, LoError, LoRuntimeError


@dataclass
class Outcome:
    """What a single Session.run produced: every error reported, in order. Static (lex/parse) errors mean nothing
    was evaluated.
    """
    errors: List[LoError] = field(default_factory=list)

    @property
    def had_runtime_error(self):
        return any(isinstance(error, LoRuntimeError) for error in self.errors)

    @property
    def had_error(self):
        return any(not isinstance(error, LoRuntimeError) for error in self.errors)

    @property
    def ok(self):
        return not self.errors

    @property
    def exit_code(self):
        if self.had_error:
            return EX_DATAERR
        elif self.had_runtime_error:
            return EX_SOFTWARE
        return 0


class Session:
    """Governs a lo session. Holds one Evaluator, so variables defined by one run are visible to later runs."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, out=None):
        self.error_handler = error_handler
        self.evaluator = Evaluator(out)

    @property
    def environment(self):
        return self.evaluator.environment

    @staticmethod
    def read(path):
        """Returns the contents of the file at path."""
        try:
            with open(path, "r", encoding="utf-8") as file:
                return file.read()
        except OSError:
            error = LoError(f"'{path}' could not be opened")
            error.exit_code = EX_NOINPUT
            raise error

    def run_file(self, path):
        """Reads and runs the file at path once."""
        return self.run(Session.read(path), path)

    def run(self, source, path=None):
        """Runs source. Every error is reported through the error handler as it is found; evaluation is skipped if
        scanning or parsing failed.
        """
        outcome = Outcome()
        self.error_handler.register_source(None if path == Session.SH_FILE else path, source)

        scanner = Scanner(source)
        tokens = scanner.scan_tokens()
        self.error_handler.register_step("tokens", " ".join(str(token) for token in tokens))
        self._report(scanner.errors, outcome)

        parser = Parser(tokens)
        statements = parser.parse()
        self._report(parser.errors, outcome)

        if outcome.had_error:
            return outcome

        self.error_handler.register_step("ast", syntax.display(statements))

        error = self.evaluator.interpret(statements)
        if error is not None:
            self._report([error], outcome)

        return outcome

    def _report(self, errors, outcome):
        for error in errors:
            self.error_handler.report(error)
            outcome.errors.append(error)
