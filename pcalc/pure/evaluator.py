"""Tree-walking evaluator for pcalc syntax trees.

Values are 32-bit signed integers: every arithmetic result wraps around, and division truncates toward zero. A Scope
maps lower-case variable names to values and is mutated in place by assignments, so a later statement in the same
Compound (or a later line in the same Session) sees earlier assignments.
"""

from pcalc.lang.error import EvaluationError
from pcalc.pure.syntax import Assign, BinaryOp, BinaryOperator, Compound, Number, UnaryOp, UnaryOperator, Variable

INT_BITS = 32


def wrap(value):
    """Reinterprets an arbitrary int as a 32-bit signed integer (two's complement wraparound)."""
    half = 1 << (INT_BITS - 1)
    return (value + half) % (1 << INT_BITS) - half


def divide(left, right):
    """Integer division truncating toward zero. Python's // floors, which differs for negative operands."""
    if right == 0:
        raise EvaluationError("division by zero")
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


class Scope:
    """Mutable mapping from variable name to value for one evaluation session. Names are never removed."""

    def __init__(self):
        self.symbols = {}

    def assign(self, name, value):
        self.symbols[name] = value

    def get(self, name):
        """Looks up name. Using a variable before assigning it is an EvaluationError, not a default of 0."""
        try:
            return self.symbols[name]
        except KeyError:
            raise EvaluationError("variable '{}' used before assignment", name) from None

    def items(self):
        return self.symbols.items()

    def __contains__(self, name):
        return name in self.symbols

    def __len__(self):
        return len(self.symbols)

    def __iter__(self):
        return iter(self.symbols)

    def __eq__(self, other):
        return isinstance(other, Scope) and self.symbols == other.symbols

    def __repr__(self):
        return f"Scope({self.symbols!r})"

    def __str__(self):
        return str(self.symbols)


BINARY_OPERATIONS = {
    BinaryOperator.PLUS: lambda left, right: left + right,
    BinaryOperator.MINUS: lambda left, right: left - right,
    BinaryOperator.MULTIPLY: lambda left, right: left * right,
    BinaryOperator.DIVIDE: divide,
}


def evaluate(node, scope):
    """Evaluates node against scope and returns its value. Assignments are written into scope as a side effect.

    The tree is trusted to come from the Parser: no well-formedness checks are made here.
    """
    if isinstance(node, Number):
        return wrap(node.value)

    elif isinstance(node, UnaryOp):
        value = evaluate(node.operand, scope)
        return value if node.op is UnaryOperator.PLUS else wrap(-value)

    elif isinstance(node, BinaryOp):
        left = evaluate(node.left, scope)
        right = evaluate(node.right, scope)  # both sides always run, left first
        return wrap(BINARY_OPERATIONS[node.op](left, right))

    elif isinstance(node, Variable):
        return scope.get(node.name)

    elif isinstance(node, Assign):
        value = evaluate(node.value, scope)
        scope.assign(node.name, value)
        return value

    elif isinstance(node, Compound):
        value = 0  # an empty block evaluates to 0
        for statement in node.statements:
            value = evaluate(statement, scope)
        return value

    raise TypeError(f"cannot evaluate {type(node).__name__}")
