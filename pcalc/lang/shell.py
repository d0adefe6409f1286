"""Handles interactive/command-line mode for the pcalc interpreter. Uses cmd as backend."""

import cmd

from pcalc.pure.render import to_postfix, to_sexpr


class Shell(cmd.Cmd):
    """pcalc interpreter shell."""
    intro = "Pascal calculator :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.line_num = 0

    def default(self, line):
        """Runs one line of pcalc through the session and prints the result."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            line = self.sess.preprocess_line(line)
            if not line:
                return

            self.sess.add(line, self.line_num)
            self.sess.run()

            while self.sess.results:
                print(self.sess.pop())

    def render(self, arg, renderer):
        """Parses arg without evaluating it and prints renderer's view of the tree."""
        with self.sess.error_handler:
            self.line_num += 1
            self.sess.error_handler.register_line(self.sess.path, arg, self.line_num)

            print(renderer(self.sess.parse(arg)))

            self.sess.error_handler.remove_line(self.sess.path)

    def do_postfix(self, arg):
        """Prints the postfix form of a program, e.g. 'postfix BEGIN x := 2 + 3 END.'"""
        self.render(arg, to_postfix)

    def do_sexpr(self, arg):
        """Prints the s-expression form of a program, e.g. 'sexpr BEGIN x := 2 + 3 END.'"""
        self.render(arg, to_sexpr)

    def do_tree(self, arg):
        """Prints the syntax tree of a program."""
        self.render(arg, lambda tree: tree.display())

    def do_scope(self, arg):
        """Prints every variable assigned so far."""
        if arg:
            return self.default(self.lastcmd)
        print(self.sess.scope)

    def do_reset(self, arg):
        """Forgets every variable assigned so far."""
        if arg:
            return self.default(self.lastcmd)
        self.sess.reset()

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        if arg:
            if hasattr(self, "do_" + arg):
                return super().do_help(arg)
            return self.default(self.lastcmd)
        print("Welcome to the pcalc interpreter!\n\n"
              "Each line is one program: BEGIN, a list of statements separated by ';', END and a\n"
              "final '.'. A statement is an assignment 'name := expression' or a nested BEGIN ... END\n"
              "block. Expressions use integers, variables, + - * / (or DIV) and parentheses.\n\n"
              "Try it out by typing 'BEGIN x := 2; y := x * 10 + 5 END.'. Variables are kept from one\n"
              "line to the next. Other commands: scope, reset, postfix, sexpr, tree, exit.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        if arg:
            return self.default(self.lastcmd)
        return True
