"""lo language interpreter.

Basic program flow, one pass per file (or per line in the shell):
    1. Scanner: turns source text into Tokens (lo/core/scanner.py)
        - bad characters, unterminated strings and comments are collected, not raised
    2. Parser: builds statements by recursive descent over the precedence ladder (lo/core/parser.py)
        - a malformed statement is reported once, then the parser skips to the next statement
    3. Evaluator: walks the statements against one Environment (lo/core/evaluator.py)
        - the first runtime error ends the pass

Session (lo/lang/session.py) strings the three together and reports through ErrorHandler (lo/lang/error.py).
"""
