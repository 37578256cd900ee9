import argparse
import logging
import sys

from .interpreter import Interpreter
from .parser import Parser
from .printer import print_stmt
from .resolver import Resolver
from .scanner import Scanner

log = logging.getLogger(__name__)

EXIT_STATIC_ERROR = 65
EXIT_RUNTIME_ERROR = 70


class Lox:
    def __init__(self, print_ast=False):
        self.interpreter = Interpreter()
        self.print_ast = print_ast
        self.had_error = False
        self.had_runtime_error = False

    def main(self, filename):
        if filename is not None:
            self.run_file(filename)
        else:
            self.run_prompt()

        if self.had_error:
            return EXIT_STATIC_ERROR
        if self.had_runtime_error:
            return EXIT_RUNTIME_ERROR
        return 0

    def run_file(self, filename):
        try:
            with open(filename, "r") as file:
                source = file.read()
        except OSError as error:
            print(f"Error opening file: {error}", file=sys.stderr)
            self.had_error = True
            return
        log.debug("running %s", filename)
        self.run(source)

    def run_prompt(self):
        while True:
            try:
                line = input("> ")
            except EOFError:
                print()
                break
            if line == "exit":
                break
            self.had_error = False
            self.had_runtime_error = False
            self.run(line)

    def run(self, source):
        try:
            tokens = Scanner(source).scan_tokens()
            statements = Parser(tokens).parse()
            if self.print_ast:
                for statement in statements:
                    print(print_stmt(statement))
                return
            locals_ = Resolver().resolve(statements)
        except (Scanner.Error, Parser.Error, Resolver.Error) as error:
            self.report(error)
            return

        self.interpreter.resolve(locals_)
        try:
            self.interpreter.interpret(statements)
        except Interpreter.Error as error:
            self.runtime_error(error)

    def report(self, error):
        print(error, file=sys.stderr)
        self.had_error = True

    def runtime_error(self, error):
        print(error, file=sys.stderr)
        self.had_runtime_error = True


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="lox", description="Run Lox scripts")
    parser.add_argument("filename", nargs="?")
    parser.add_argument(
        "--ast", action="store_true",
        help="print the parsed syntax tree instead of running it")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="log pipeline stages")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(message)s")

    return Lox(print_ast=args.ast).main(args.filename)


if __name__ == "__main__":
    sys.exit(main())
