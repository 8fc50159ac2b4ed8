"""Error handling for the lo language. Only LoErrors should be encountered during a run: if another type of error is
raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Errors come in three kinds, all rendered as `[line L] Error at '<lexeme>': <message>`:
    - LexError: bad character, unterminated string or comment (collected by the Scanner, never raised)
    - ParseError: malformed statement (raised inside the Parser, collected at statement boundaries)
    - LoRuntimeError: bad operand or unbound variable (raised inside the Evaluator, ends the current run)
"""

import sys

from termcolor import colored

from lo.core.token import TokenKind


EX_DATAERR = 65   # lex/parse failure
EX_NOINPUT = 66   # source file could not be read
EX_SOFTWARE = 70  # runtime failure


class LoError(Exception):
    """Templates an error message with its source position. lexeme is the offending source text (None if there is
    nothing to point at) and at_end marks errors found at end of input.
    """
    exit_code = EX_DATAERR

    def __init__(self, message, line=None, lexeme=None, at_end=False, internal=False):
        super().__init__(message)
        self.message = message
        self.line = line
        self.lexeme = lexeme
        self.at_end = at_end
        self.internal = internal

    @classmethod
    def from_token(cls, token, message):
        """Builds an error positioned at token. EOF is reported as 'at end'."""
        if token.kind is TokenKind.EOF:
            return cls(message, token.line, at_end=True)
        return cls(message, token.line, token.lexeme)

    @property
    def where(self):
        if self.at_end:
            return " at end"
        elif self.lexeme is not None:
            return f" at '{self.lexeme}'"
        return ""

    @property
    def prefix(self):
        line = f"[line {self.line}] " if self.line is not None else ""
        return f"{line}Error{self.where}: "

    def __str__(self):
        return self.prefix + self.message


class LexError(LoError):
    """Bad input character, or a string/comment that never ends."""


class ParseError(LoError):
    """Syntactically invalid statement."""


class LoRuntimeError(LoError):
    """Failure while evaluating an otherwise valid program."""
    exit_code = EX_SOFTWARE


class ErrorHandler:
    """Context manager that will report lo errors and turn stray Python errors into internal lo errors. Also owns
    the failure flags the driver reads after a run: they are set when an error is reported and never reset.
    """
    ERROR = "red"
    STEP = "cyan"

    def __init__(self, fatal=True, verbose=False, color=True, file=None):
        self.fatal = fatal
        self.verbose = verbose
        self.color = color
        self.file = file  # None means whatever sys.stdout is at print time

        self.had_error = False
        self.had_runtime_error = False

        self.path = None
        self.lines = []

    def register_source(self, path, source):
        """Registers the text about to be run so diagnostics can quote it. Should be called prior to Session.run."""
        self.path = path
        self.lines = source.splitlines()

    def register_step(self, stage, text):
        """Prints an intermediate pipeline product (token stream, syntax tree) if verbose."""
        if self.verbose:
            self._print(self._colored(f"{stage}: ", ErrorHandler.STEP) + str(text))

    def _colored(self, text, color=None):
        return colored(text, color, attrs=["bold"], no_color=not self.color)

    def _print(self, text):
        print(text, file=self.file if self.file is not None else sys.stdout)

    def diagnose(self, error):
        """Returns the line error occurred on with the offending lexeme highlighted, or None if either can't be
        found.
        """
        if error.internal or not error.lexeme or error.line is None or not 0 < error.line <= len(self.lines):
            return None

        line = self.lines[error.line - 1]
        start = line.find(error.lexeme)  # assumes first occurrence on the line is the offending one
        if start == -1:
            return None

        end = start + len(error.lexeme)

        diagnosis = "  " + line[:start]
        diagnosis += self._colored(line[start:end], ErrorHandler.ERROR)
        diagnosis += line[end:] + "\n"

        diagnosis += "  " + " " * start
        diagnosis += self._colored("^" + "~" * (end - start - 1), ErrorHandler.ERROR)

        return diagnosis

    def report(self, error):
        """Prints error and sets the matching failure flag. Never exits."""
        if isinstance(error, LoRuntimeError):
            self.had_runtime_error = True
        else:
            self.had_error = True

        error_msg = ""
        if self.path is not None and error.line is not None:
            error_msg += f"  File '{self.path}', line {error.line}:\n"

        if error.internal:
            error_msg += self._colored("[internal] ", ErrorHandler.ERROR)

        error_msg += self._colored(error.prefix, ErrorHandler.ERROR) + error.message
        self._print(error_msg)

        diagnosis = self.diagnose(error)
        if diagnosis:
            self._print(diagnosis)

    def throw(self, error):
        """Reports error, then exits with the error's exit code if this handler is fatal."""
        self.report(error)
        if self.fatal:
            sys.exit(error.exit_code)

    @property
    def exit_code(self):
        """Exit status for the runs seen so far: static errors win over runtime errors."""
        if self.had_error:
            return EX_DATAERR
        elif self.had_runtime_error:
            return EX_SOFTWARE
        return 0

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(LoRuntimeError("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(LoRuntimeError("expression nested too deeply"))
        elif exc_type is not None and issubclass(exc_type, LoError):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(LoRuntimeError(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
