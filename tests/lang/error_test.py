import io
import unittest

from lo.core.token import Token, TokenKind
from lo.lang.error import ErrorHandler, LexError, LoError, LoRuntimeError, ParseError


def handler(**kwargs):
    kwargs.setdefault("fatal", False)
    return ErrorHandler(color=False, file=io.StringIO(), **kwargs)


class LoErrorTestCase(unittest.TestCase):

    def test_str(self):
        eof = Token(TokenKind.EOF, "", None, 4)
        plus = Token(TokenKind.PLUS, "+", None, 2)

        cases = [
            (ParseError.from_token(eof, "expected an expression"), "[line 4] Error at end: expected an expression"),
            (LoRuntimeError.from_token(plus, "operands must be numbers"),
             "[line 2] Error at '+': operands must be numbers"),
            (LexError("unterminated string", 7), "[line 7] Error: unterminated string"),
            (LexError("unexpected character", 1, "@"), "[line 1] Error at '@': unexpected character"),
            (LoError("'x.lo' could not be opened"), "Error: 'x.lo' could not be opened"),
        ]
        for case, expected in cases:
            self.assertEqual(expected, str(case))

    def test_exit_codes(self):
        self.assertEqual(65, LexError("").exit_code)
        self.assertEqual(65, ParseError("").exit_code)
        self.assertEqual(70, LoRuntimeError("").exit_code)


class ErrorHandlerTestCase(unittest.TestCase):

    def test_flags(self):
        error_handler = handler()
        self.assertEqual((False, False, 0), (error_handler.had_error, error_handler.had_runtime_error,
                                             error_handler.exit_code))

        error_handler.report(LoRuntimeError("boom", 1))
        self.assertEqual((False, True, 70), (error_handler.had_error, error_handler.had_runtime_error,
                                             error_handler.exit_code))

        error_handler.report(ParseError("bad", 1))
        self.assertEqual((True, True, 65), (error_handler.had_error, error_handler.had_runtime_error,
                                            error_handler.exit_code))

    def test_diagnose(self):
        error_handler = handler()
        error_handler.register_source("test.lo", 'var a = 1;\nprint a + "b";')

        error_handler.report(LoRuntimeError("operands must be two numbers or two strings", 2, "+"))
        self.assertEqual(
            "  File 'test.lo', line 2:\n"
            "[line 2] Error at '+': operands must be two numbers or two strings\n"
            '  print a + "b";\n'
            "          ^\n",
            error_handler.file.getvalue()
        )

        should_fail = [LoError("no line"), LoError("no lexeme", 1), LoError("past end", 9, "x"),
                       LoError("not on line", 1, "zzz")]
        for case in should_fail:
            self.assertIsNone(error_handler.diagnose(case), case.message)

    def test_register_step(self):
        quiet, verbose = handler(), handler(verbose=True)
        for error_handler in (quiet, verbose):
            error_handler.register_step("ast", "(print 1)")

        self.assertEqual("", quiet.file.getvalue())
        self.assertEqual("ast: (print 1)\n", verbose.file.getvalue())

    def test_context_manager(self):
        error_handler = handler()
        with error_handler:
            raise ParseError("bad", 1, ";")
        self.assertTrue(error_handler.had_error)

        error_handler = handler()
        with error_handler:
            raise KeyboardInterrupt()
        self.assertIn("keyboard interrupt", error_handler.file.getvalue())

        error_handler = handler()
        with self.assertRaises(ValueError):
            with error_handler:
                raise ValueError("oops")
        self.assertIn("[internal] Error: unknown error: 'ValueError: oops'", error_handler.file.getvalue())

    def test_fatal(self):
        error_handler = handler(fatal=True)
        with self.assertRaises(SystemExit) as cm:
            with error_handler:
                raise LoRuntimeError("boom", 1)
        self.assertEqual(70, cm.exception.code)

        with self.assertRaises(SystemExit) as cm:
            with handler(fatal=True):
                raise SystemExit(3)
        self.assertEqual(3, cm.exception.code)


if __name__ == '__main__':
    unittest.main()
