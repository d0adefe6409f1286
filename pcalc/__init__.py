"""Pascal calculator: a small Pascal-like statement/expression language.

Basic program flow, one line of input at a time:
    1. Lexer: turns the line into Tokens (pure/lexical.py)
    2. Parser: recursive descent over the Tokens, producing a syntax tree (pure/parser.py, pure/syntax.py)
    3. Evaluator: walks the tree against a Scope of variables and returns the value (pure/evaluator.py)

lang/ wraps this pipeline in a Session, reports errors through an ErrorHandler and provides the interactive shell.
"""
