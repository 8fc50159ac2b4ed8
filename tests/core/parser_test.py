import unittest

from lo.core import syntax
from lo.core.parser import Parser, parse
from lo.core.scanner import scan
from lo.lang.error import ParseError


def parse_source(source):
    tokens, __ = scan(source)
    return parse(tokens)


class ParserTestCase(unittest.TestCase):

    def test_parse(self):
        statements, errors = parse_source("1+2+9.22;")
        self.assertEqual([], errors)
        self.assertEqual("(; (+ (+ 1 2) 9.22))", syntax.display(statements))

    def test_precedence(self):
        cases = {
            "2*3+4;": "(; (+ (* 2 3) 4))",
            "2+3*4;": "(; (+ 2 (* 3 4)))",
            "(1+2)*3;": "(; (* ((+ 1 2)) 3))",
            "8/4/2;": "(; (/ (/ 8 4) 2))",
            "1-2-3;": "(; (- (- 1 2) 3))",
            "-1*2;": "(; (* -1 2))",
            "--x;": "(; --x)",
            "!!true;": "(; !!true)",
            "1 < 2 == true;": "(; (== (< 1 2) true))",
            "1 + 2 >= 3 != nil;": "(; (!= (>= (+ 1 2) 3) nil))",
            "a = b = 3;": "(; (= a (= b 3)))",
            "a = 1 + 2;": "(; (= a (+ 1 2)))",
            "var x;": "(var x)",
            'var s = "hi";': "(var s hi)",
            "print nil;": "(print nil)",
            "/* c */ print 1; // d": "(print 1)",
            "print 1; print 2;": "(print 1)\n(print 2)",
        }
        for case, expected in cases.items():
            statements, errors = parse_source(case)
            self.assertEqual([], errors, case)
            self.assertEqual(expected, syntax.display(statements), case)

    def test_node_types(self):
        statements, __ = parse_source("x = -y;")
        stmt, = statements

        self.assertIsInstance(stmt, syntax.Expression)
        self.assertIsInstance(stmt.expression, syntax.Assign)
        self.assertEqual("x", stmt.expression.name.lexeme)
        self.assertIsInstance(stmt.expression.value, syntax.Unary)
        self.assertIsInstance(stmt.expression.value.right, syntax.Variable)

    def test_empty(self):
        for case in ["", "  ", "/* nothing */"]:
            self.assertEqual(([], []), parse_source(case), repr(case))

    def test_errors(self):
        cases = {
            "print ;": "[line 1] Error at ';': expected an expression",
            "1 +": "[line 1] Error at end: expected an expression",
            "(1 + 2;": "[line 1] Error at ';': expected ')' after expression",
            "var 1 = 2;": "[line 1] Error at '1': expected variable name",
            "var x = 1": "[line 1] Error at end: expected ';' after variable declaration",
            "print 1": "[line 1] Error at end: expected ';' after value",
            "1 2;": "[line 1] Error at '2': expected ';' after expression",
            "\n\n)": "[line 3] Error at ')': expected an expression",
        }
        for case, expected in cases.items():
            __, errors = parse_source(case)
            self.assertEqual([expected], [str(error) for error in errors], case)
            self.assertIsInstance(errors[0], ParseError, case)

    def test_invalid_assignment_target(self):
        statements, errors = parse_source("1 = 2; (a) = 3;")

        self.assertEqual(
            ["[line 1] Error at '=': invalid assignment target"] * 2,
            [str(error) for error in errors]
        )
        # not fatal: both statements still parse, keeping the left-hand side
        self.assertEqual("(; 1)\n(; (a))", syntax.display(statements))

    def test_synchronize(self):
        statements, errors = parse_source("print ; var x = 1; 1 +; print x;")
        self.assertEqual(2, len(errors))
        self.assertEqual("(var x 1)\n(print x)", syntax.display(statements))

        # no ';' to stop at: resume at the next statement keyword
        statements, errors = parse_source("1 2 3 print 3;")
        self.assertEqual(1, len(errors))
        self.assertEqual("(print 3)", syntax.display(statements))

    def test_deep_nesting(self):
        source = "print " + "(" * 200 + "1" + ")" * 200 + "; print 2;"
        statements, errors = parse_source(source)

        self.assertEqual(["expression nested too deeply"], [error.message for error in errors])
        self.assertIsInstance(errors[0], ParseError)
        self.assertEqual("(print 2)", syntax.display(statements))

        statements, errors = parse_source("print " + "(" * 20 + "1" + ")" * 20 + ";")
        self.assertEqual([], errors)

    def test_errors_attribute(self):
        tokens, __ = scan("print ; print 1;")
        parser = Parser(tokens)
        statements = parser.parse()

        self.assertEqual(1, len(statements))
        self.assertEqual(1, len(parser.errors))


if __name__ == '__main__':
    unittest.main()
