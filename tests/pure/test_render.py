import unittest

from pcalc.pure.lexical import Lexer
from pcalc.pure.parser import Parser
from pcalc.pure.render import to_postfix, to_sexpr


def parse_expression(text):
    return Parser(Lexer(text)).parse_expression()


def parse(text):
    return Parser(Lexer(text)).parse()


class RenderTestCase(unittest.TestCase):

    def test_expressions(self):
        cases = {
            "2 + 3 * -4": ("2 3 4 neg * +", "(+ 2 (* 3 (neg 4)))"),
            "(1 - 2) - 3": ("1 2 - 3 -", "(- (- 1 2) 3)"),
            "1 - (2 - 3)": ("1 2 3 - -", "(- 1 (- 2 3))"),
            "+5": ("5", "5"),
            "- - x": ("x neg neg", "(neg (neg x))"),
            "8 DIV Size": ("8 size /", "(/ 8 size)"),
        }
        for case, (postfix, sexpr) in cases.items():
            tree = parse_expression(case)
            self.assertEqual(postfix, to_postfix(tree), case)
            self.assertEqual(sexpr, to_sexpr(tree), case)

    def test_programs(self):
        cases = {
            "BEGIN END.": ("", "(begin)"),
            "BEGIN x := 2; Y := x * 3 END.": ("2 x :=; x 3 * y :=", "(begin (:= x 2) (:= y (* x 3)))"),
            "BEGIN BEGIN a := -1 END END.": ("1 neg a :=", "(begin (begin (:= a (neg 1))))"),
        }
        for case, (postfix, sexpr) in cases.items():
            tree = parse(case)
            self.assertEqual(postfix, to_postfix(tree), case)
            self.assertEqual(sexpr, to_sexpr(tree), case)

    def test_unknown_node(self):
        self.assertRaises(TypeError, to_postfix, 3)
        self.assertRaises(TypeError, to_sexpr, None)


if __name__ == '__main__':
    unittest.main()
