import contextlib
import io
import os
import unittest
from unittest import mock

from pcalc.lang.error import ErrorHandler, EvaluationError, GenericException, LexicalError, ParseError
from pcalc.pure.lexical import Token, TokenType


class ErrorTestCase(unittest.TestCase):

    def setUp(self):
        patcher = mock.patch.dict(os.environ, {"ANSI_COLORS_DISABLED": "1"})
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_generic_exception(self):
        error = GenericException("'{}' could not be opened", "missing.pas", diagnosis=False)
        self.assertEqual("'missing.pas' could not be opened", str(error))
        self.assertEqual("missing.pas", error.expr)
        self.assertEqual(0, error.start)
        self.assertEqual(len("missing.pas"), error.end)

    def test_subclasses(self):
        lexical = LexicalError("$", "x := $", 5)
        self.assertEqual("invalid character '$'", str(lexical))
        self.assertEqual(("$", 5, 6), (lexical.char, lexical.start, lexical.end))

        parse = ParseError("expected a statement, found '{1}'", Token(TokenType.SEMI), "BEGIN ; 1 END.", 8, 9)
        self.assertEqual("expected a statement, found ';'", str(parse))
        self.assertEqual(Token(TokenType.SEMI), parse.token)

        evaluation = EvaluationError("division by zero")
        self.assertFalse(evaluation.diagnosis)

        for error in [lexical, parse, evaluation]:
            self.assertIsInstance(error, GenericException)

    def test_diagnose(self):
        error = LexicalError("$", "x := $ + 1", 5)
        self.assertEqual("  x := $ + 1\n       ^", ErrorHandler.diagnose(error))

        error = ParseError("expected '.', found '{1}'", Token(TokenType.IDENTIFIER, "foo"), "BEGIN END foo", 10, 13)
        self.assertEqual("  BEGIN END foo\n            ^~~", ErrorHandler.diagnose(error))

    def test_non_fatal_handler_reports_and_continues(self):
        output = io.StringIO()
        handler = ErrorHandler(fatal=False)
        handler.register_file("<in>")
        handler.register_line("<in>", "x := $", 3)

        with contextlib.redirect_stdout(output):
            with handler:
                raise LexicalError("$", "x := $", 5)

        self.assertIn("error: invalid character '$'", output.getvalue())
        self.assertIn("^", output.getvalue())
        self.assertEqual({"<in>": (None, None)}, handler.traceback)

    def test_fatal_handler_exits(self):
        with contextlib.redirect_stdout(io.StringIO()):
            with self.assertRaises(SystemExit) as context:
                with ErrorHandler():
                    raise EvaluationError("division by zero")
        self.assertEqual(1, context.exception.code)

    def test_traceback(self):
        output = io.StringIO()
        handler = ErrorHandler(fatal=False)
        handler.register_line("prog.pas", "BEGIN y := z END.", 4)

        with contextlib.redirect_stdout(output):
            with handler:
                raise EvaluationError("variable '{}' used before assignment", "z")

        self.assertIn("File 'prog.pas', line 4:", output.getvalue())
        self.assertIn("error: variable 'z' used before assignment", output.getvalue())

    def test_recursion_error(self):
        output = io.StringIO()
        with contextlib.redirect_stdout(output):
            with ErrorHandler(fatal=False):
                raise RecursionError()
        self.assertIn("expression nested too deeply", output.getvalue())

    def test_internal_error_propagates(self):
        output = io.StringIO()
        with contextlib.redirect_stdout(output):
            with self.assertRaises(ZeroDivisionError):
                with ErrorHandler(fatal=False):
                    raise ZeroDivisionError("boom")
        self.assertIn("[internal] error: unknown error: 'ZeroDivisionError: boom'", output.getvalue())

    def test_warn(self):
        output = io.StringIO()
        handler = ErrorHandler(fatal=False)
        handler.register_line("<in>", "x := 4294967297", 2)

        with contextlib.redirect_stdout(output):
            handler.warn("integer literal '{1}' does not fit", ("x := 4294967297", "4294967297"), start=5, end=15)

        self.assertIn("<in>:2:6: warning: integer literal '4294967297' does not fit", output.getvalue())

    def test_register_step(self):
        output = io.StringIO()
        with contextlib.redirect_stdout(output):
            ErrorHandler().register_step("value", 3)
            ErrorHandler(verbose=True).register_step("value", 4)
        self.assertEqual("value: 4\n", output.getvalue())


if __name__ == '__main__':
    unittest.main()
