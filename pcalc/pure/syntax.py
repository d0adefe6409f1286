"""Abstract syntax tree for the pcalc language.

Formally, the tree the parser produces can be described as

```
<AST> ::= UnaryOp(<unary-op>, <AST>)             ; "+x", "-x"
        | BinaryOp(<AST>, <binary-op>, <AST>)    ; "x + y", "x - y", "x * y", "x / y" (also "x DIV y")
        | Number(<uint32>)
        | Variable(<name>)                       ; name is always lower-case
        | Assign(<name>, <AST>)                  ; "name := expr"
        | Compound(<AST>*)                       ; "BEGIN s1; s2; ... END"
```

Every node owns its children: nothing is shared between two parents. Nodes keep the Token they were built from, but
two trees compare equal only if they have the same shape, operators and values.
"""

from abc import ABC
from dataclasses import dataclass, field
from enum import Enum
from typing import List

from pcalc.pure.lexical import Token, TokenType


class UnaryOperator(Enum):
    PLUS = "+"
    MINUS = "-"

    @classmethod
    def from_token(cls, token):
        """Narrows token to a unary operator. Any other token is a programming error."""
        try:
            return _UNARY_OPERATORS[token.kind]
        except KeyError:
            raise ValueError(f"invalid unary operator {token!r}") from None


class BinaryOperator(Enum):
    PLUS = "+"
    MINUS = "-"
    MULTIPLY = "*"
    DIVIDE = "/"

    @classmethod
    def from_token(cls, token):
        """Narrows token to a binary operator. DIV and "/" both divide."""
        try:
            return _BINARY_OPERATORS[token.kind]
        except KeyError:
            raise ValueError(f"invalid binary operator {token!r}") from None


_UNARY_OPERATORS = {
    TokenType.PLUS: UnaryOperator.PLUS,
    TokenType.MINUS: UnaryOperator.MINUS,
}

_BINARY_OPERATORS = {
    TokenType.PLUS: BinaryOperator.PLUS,
    TokenType.MINUS: BinaryOperator.MINUS,
    TokenType.MULTIPLY: BinaryOperator.MULTIPLY,
    TokenType.DIVIDE: BinaryOperator.DIVIDE,
    TokenType.DIV: BinaryOperator.DIVIDE,
}


class AST(ABC):
    """Superclass of every node in a pcalc syntax tree."""

    @property
    def nodes(self):
        """Children of this node, in evaluation order."""
        return []

    def label(self):
        """One-line description of this node, without its children."""
        return type(self).__name__

    def display(self, indents=0):
        """Recursively displays the tree in a readable format.

        Format:
        <AST>(<label>, nodes=[
            <AST>(<label>, nodes=[
                ...
                <AST>(<label>)  # <-- if nodes is empty
            ])
        ])
        """
        result = f"{'    ' * indents}{type(self).__name__}({self.label()}"
        if self.nodes:
            result += ", nodes=["
            for node in self.nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"


@dataclass
class UnaryOp(AST):
    token: Token = field(compare=False)
    op: UnaryOperator
    operand: AST

    def __post_init__(self):
        if not isinstance(self.op, UnaryOperator):
            raise TypeError(f"expected a UnaryOperator, got {self.op!r}")

    @classmethod
    def from_token(cls, token, operand):
        return cls(token, UnaryOperator.from_token(token), operand)

    @property
    def nodes(self):
        return [self.operand]

    def label(self):
        return f"'{self.op.value}'"


@dataclass
class BinaryOp(AST):
    token: Token = field(compare=False)
    left: AST
    op: BinaryOperator
    right: AST

    def __post_init__(self):
        if not isinstance(self.op, BinaryOperator):
            raise TypeError(f"expected a BinaryOperator, got {self.op!r}")

    @classmethod
    def from_token(cls, left, token, right):
        return cls(token, left, BinaryOperator.from_token(token), right)

    @property
    def nodes(self):
        return [self.left, self.right]

    def label(self):
        return f"'{self.op.value}'"


@dataclass
class Number(AST):
    token: Token = field(compare=False)
    value: int

    @classmethod
    def from_token(cls, token):
        return cls(token, token.value)

    def label(self):
        return str(self.value)


@dataclass
class Variable(AST):
    token: Token = field(compare=False)
    name: str

    def __post_init__(self):
        self.name = self.name.lower()  # variable lookup is case-insensitive

    @classmethod
    def from_token(cls, token):
        return cls(token, token.value)

    def label(self):
        return f"'{self.name}'"


@dataclass
class Assign(AST):
    token: Token = field(compare=False)
    name: str
    value: AST

    @classmethod
    def from_variable(cls, variable, token, value):
        """The target of an assignment is always a parsed Variable, so its name is already lower-case."""
        return cls(token, variable.name, value)

    @property
    def nodes(self):
        return [self.value]

    def label(self):
        return f"'{self.name}'"


@dataclass
class Compound(AST):
    statements: List[AST] = field(default_factory=list)

    @property
    def nodes(self):
        return list(self.statements)

    def label(self):
        return f"{len(self.statements)} statement{'' if len(self.statements) == 1 else 's'}"
