"""Session control for the pcalc language. Runs the lexer -> parser -> evaluator pipeline on one line at a time, either
in command-line mode or file interpretation mode.

A session owns the Scope. By default the scope persists across lines, so a variable assigned on one line can be used on
the next; with persistent=False every line starts from an empty scope.
"""

from pcalc.lang.error import GenericException
from pcalc.pure.evaluator import Scope, evaluate
from pcalc.pure.lexical import Lexer
from pcalc.pure.parser import Parser
from pcalc.pure.render import to_sexpr


class Session:
    """Governs a pcalc session, with control over the scope of variables."""
    SH_FILE = "<in>"  # command-line interpreter filename
    COMMENT = "#"     # starts a comment that runs to the end of a line in .pas files

    def __init__(self, error_handler, path, cmd_line, expression_mode=False, persistent=True):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path                         # used for error messages
        self.cmd_line = cmd_line                 # whether or not in command-line mode
        self.expression_mode = expression_mode   # parse bare expressions instead of BEGIN ... END. programs
        self.persistent = persistent             # whether or not the scope survives from one line to the next

        self.scope = Scope()
        self.to_exec = {}  # dict of line num: (line, tree) to evaluate
        self.results = []  # printable results of evaluated lines, oldest first

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    lines = list(file)
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

            for line_num, line in enumerate(lines, 1):
                line = Session.preprocess_line(line)
                if line:
                    self.add(line, line_num)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line):
        """Strips '#' comments and surrounding whitespace. Returns "" for lines with nothing to run.

        A '#' inside a {...} comment is part of that comment and is left for the lexer to skip.
        """
        in_braces = False
        for i, char in enumerate(line):
            if char == "{":
                in_braces = True
            elif char == "}":
                in_braces = False
            elif char == Session.COMMENT and not in_braces:
                line = line[:i]
                break
        return line.strip()

    def parse(self, expr):
        """Parses expr into a syntax tree, reporting any wrapped-around integer literals as warnings."""
        lexer = Lexer(expr)
        parser = Parser(lexer)
        tree = parser.parse_expression() if self.expression_mode else parser.parse()

        for msg, exprs, start, end in lexer.warnings:
            self.error_handler.warn(msg, exprs, start=start, end=end)
        return tree

    def add(self, expr, line_num):
        """Parses expr and queues it. Evaluation is delayed until run is called."""
        self.error_handler.register_line(self.path, expr, line_num)  # in case error is raised

        tree = self.parse(expr)
        self.error_handler.register_step("tree", to_sexpr(tree))
        self.to_exec[line_num] = (expr, tree)

        self.error_handler.remove_line(self.path)  # error was not raised

    def run(self):
        """Evaluates this session's queued trees in order. Will raise any errors that are encountered; assignments made
        before the failing statement stay in the scope.
        """
        for line_num, (expr, tree) in list(self.to_exec.items()):
            self.error_handler.register_line(self.path, expr, line_num)

            if not self.persistent:
                self.scope = Scope()

            try:
                value = evaluate(tree, self.scope)
            finally:
                del self.to_exec[line_num]

            self.error_handler.register_step("value", value)
            self.results.append(str(value) if self.expression_mode else str(self.scope))

            self.error_handler.remove_line(self.path)

    def pop(self):
        """Removes and returns the oldest result that has not been printed yet."""
        return self.results.pop(0)

    def reset(self):
        """Starts over with an empty scope."""
        self.scope = Scope()
