"""Recursive-descent parser for the pcalc language. One method per nonterminal:

```
<program>              ::= <compound_statement> "."
<compound_statement>   ::= BEGIN <statement_list> END
<statement_list>       ::= (<statement> (";" <statement>)*)?    ; empty statements are skipped
<statement>            ::= <compound_statement> | <assignment_statement>
<assignment_statement> ::= <variable> ":=" <expr>
<variable>             ::= <identifier>
<expr>                 ::= <term> (("+" | "-") <term>)*
<term>                 ::= <factor> (("*" | "/" | DIV) <factor>)*
<factor>               ::= ("+" | "-") <factor>
                         | "(" <expr> ")"
                         | <integer>
                         | <variable>
```

Binary operators associate to the left, unary operators bind tighter than any binary operator. The parser reads one
token ahead and never backtracks: the first violation raises a ParseError and no partial tree is returned.
"""

from pcalc.lang.error import ParseError
from pcalc.pure.lexical import Token, TokenType
from pcalc.pure.syntax import Assign, BinaryOp, Compound, Number, UnaryOp, Variable


class Parser:
    """Builds an AST from the Tokens of a single Lexer."""
    EXPR_OPS = (TokenType.PLUS, TokenType.MINUS)
    TERM_OPS = (TokenType.MULTIPLY, TokenType.DIVIDE, TokenType.DIV)

    def __init__(self, lexer):
        """Reads the first token right away, so current_token is always the next unconsumed token."""
        self.lexer = lexer
        self.current_token = lexer.next_token()
        self.position = lexer.token_start
        self.end = lexer.pos

    def error(self, msg):
        """ParseError pointing at the current token. msg may refer to the token as '{1}'."""
        return ParseError(msg, self.current_token, self.lexer.text, self.position, self.end)

    def advance(self):
        """Consumes the current token and returns it."""
        token = self.current_token
        self.current_token = self.lexer.next_token()
        self.position = self.lexer.token_start
        self.end = self.lexer.pos
        return token

    def eat(self, kind):
        """Consumes the current token if it is of the expected kind, else raises a ParseError."""
        if self.current_token.kind is not kind:
            raise self.error(f"expected '{Token(kind)}', found '{{1}}'")
        return self.advance()

    def parse(self):
        """Parses a whole program. Trailing input after the final '.' is an error."""
        node = self.program()
        self.eat(TokenType.EOF)
        return node

    def parse_expression(self):
        """Parses a bare expression that makes up the whole input (calculator mode)."""
        node = self.expr()
        self.eat(TokenType.EOF)
        return node

    def program(self):
        node = self.compound_statement()
        self.eat(TokenType.DOT)
        return node

    def compound_statement(self):
        self.eat(TokenType.BEGIN)
        statements = self.statement_list()
        self.eat(TokenType.END)
        return Compound(statements)

    def statement_list(self):
        statements = []
        while self.current_token.kind is not TokenType.END:
            if self.current_token.kind is TokenType.SEMI:
                self.advance()
                continue

            statements.append(self.statement())

            if self.current_token.kind is not TokenType.END:
                self.eat(TokenType.SEMI)
        return statements

    def statement(self):
        if self.current_token.kind is TokenType.BEGIN:
            return self.compound_statement()
        elif self.current_token.kind is TokenType.IDENTIFIER:
            return self.assignment_statement()
        raise self.error("expected a statement, found '{1}'")

    def assignment_statement(self):
        target = self.variable()
        token = self.eat(TokenType.ASSIGN)
        return Assign.from_variable(target, token, self.expr())

    def variable(self):
        return Variable.from_token(self.eat(TokenType.IDENTIFIER))

    def factor(self):
        kind = self.current_token.kind

        if kind in (TokenType.PLUS, TokenType.MINUS):
            token = self.advance()
            return UnaryOp.from_token(token, self.factor())

        elif kind is TokenType.OPEN_PAREN:
            self.advance()
            node = self.expr()
            self.eat(TokenType.CLOSE_PAREN)
            return node

        elif kind is TokenType.INTEGER_LITERAL:
            return Number.from_token(self.advance())

        elif kind is TokenType.IDENTIFIER:
            return self.variable()

        raise self.error("expected an integer, identifier or '(', found '{1}'")

    def term(self):
        node = self.factor()
        while self.current_token.kind in Parser.TERM_OPS:
            token = self.advance()
            node = BinaryOp.from_token(node, token, self.factor())
        return node

    def expr(self):
        node = self.term()
        while self.current_token.kind in Parser.EXPR_OPS:
            token = self.advance()
            node = BinaryOp.from_token(node, token, self.term())
        return node
