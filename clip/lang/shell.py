"""Handles interactive/command-line mode for the clip interpreter. Uses cmd as backend."""

import cmd

from clip.core.lexer import tokenize
from clip.core.parser import Parser
from clip.lang.session import Session


def dump_tokens(source, file=None):
    """Prints every token of source on its own line."""
    for tok in tokenize(source):
        print(tok, file=file)


def dump_ast(source, file=None):
    """Prints every top-level expression of source on its own line."""
    for expr in Parser().parse(tokenize(source)):
        print(f"{expr};", file=file)


class Shell(cmd.Cmd):
    """clip interpreter shell."""
    intro = "clip interpreter :: Python backend\nType 'help' for more information, 'exit' to leave."
    prompt = ">> "
    secondary_prompt = ".. "  # used for line continuations
    _tmp_prompt = ">> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self._tmp_line = ""

    def default(self, line):
        """Executes arbitrary clip code."""
        self.sess.results.clear()
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            line, add_to_prev = Session.preprocess_line(line, self._tmp_line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            self.execute(line)

    def execute(self, source):
        """Evaluates a complete input and prints the value of each of its expressions."""
        self.sess.add(source)
        self.sess.run()

        while self.sess.results:
            print(self.sess.pop(), file=self.stdout)

    def onecmd(self, line):
        """Routes everything but the shell commands to default, so that clip code starting with an identifier like
        'help_me' or an operator like '!' isn't mistaken for a command.
        """
        cmd_name, __, line = self.parseline(line)
        if cmd_name == "EOF" or (not self._tmp_line and cmd_name in ("help", "exit")):
            return super().onecmd(line)
        if not line and not self._tmp_line:
            return self.emptyline()
        return self.default(line)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the clip interpreter!\n\n"
              "clip is a small prefix-notation language: operators and calls read left to right,\n"
              "braces delimit function bodies and brackets their parameters.\n\n"
              "Try it out by typing '= add { [a b] + a b }'. This will bind a function to the\n"
              "name 'add'. Next, try typing 'add 1 2'. This will apply 'add' to 1 and 2, giving\n"
              "'integer : 3' as the result. '()' is the unit value: 'f ()' calls a function that\n"
              "takes no parameters.", file=self.stdout)

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return False

    def do_EOF(self, arg):
        """Exits interpreter."""
        print(file=self.stdout)
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True


class DumpShell(Shell):
    """clip shell for --token and --parse: prints the tokens or syntax tree of each input instead of evaluating it."""
    intro = "clip interpreter :: dump mode\nType 'exit' to leave."

    def __init__(self, sess, dump, *args, **kwargs):
        super().__init__(sess, *args, **kwargs)

        self.dump = dump  # dump_tokens or dump_ast

    def execute(self, source):
        self.sess.error_handler.register_source(self.sess.path, source)
        self.dump(source, self.stdout)
        self.sess.error_handler.remove_source(self.sess.path)
