"""Renders pcalc syntax trees as text. Both renderers are pure functions of the tree.

- postfix: "2 + 3 * -4" -> "2 3 4 neg * +"
- s-expression: "2 + 3 * -4" -> "(+ 2 (* 3 (neg 4)))"
"""

from pcalc.pure.syntax import Assign, BinaryOp, Compound, Number, UnaryOp, UnaryOperator, Variable


def to_postfix(node):
    """Reverse Polish notation. Unary plus disappears, unary minus becomes a trailing 'neg'."""
    if isinstance(node, Number):
        return str(node.value)

    elif isinstance(node, Variable):
        return node.name

    elif isinstance(node, UnaryOp):
        operand = to_postfix(node.operand)
        return operand if node.op is UnaryOperator.PLUS else f"{operand} neg"

    elif isinstance(node, BinaryOp):
        return f"{to_postfix(node.left)} {to_postfix(node.right)} {node.op.value}"

    elif isinstance(node, Assign):
        return f"{to_postfix(node.value)} {node.name} :="

    elif isinstance(node, Compound):
        return "; ".join(to_postfix(statement) for statement in node.statements)

    raise TypeError(f"cannot render {type(node).__name__}")


def to_sexpr(node):
    """Lisp-style prefix notation."""
    if isinstance(node, Number):
        return str(node.value)

    elif isinstance(node, Variable):
        return node.name

    elif isinstance(node, UnaryOp):
        operand = to_sexpr(node.operand)
        return operand if node.op is UnaryOperator.PLUS else f"(neg {operand})"

    elif isinstance(node, BinaryOp):
        return f"({node.op.value} {to_sexpr(node.left)} {to_sexpr(node.right)})"

    elif isinstance(node, Assign):
        return f"(:= {node.name} {to_sexpr(node.value)})"

    elif isinstance(node, Compound):
        return "(" + " ".join(["begin"] + [to_sexpr(statement) for statement in node.statements]) + ")"

    raise TypeError(f"cannot render {type(node).__name__}")
