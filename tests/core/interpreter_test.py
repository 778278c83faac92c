import unittest

from clip.core import errors
from clip.core.environment import Environment
from clip.core.interpreter import Interpreter
from clip.core.parser import parse_program
from clip.core.values import INT_MAX, INT_MIN, UNIT, Boolean, Float, Function, Integer, String


def run(src, env=None):
    return Interpreter().evaluate_all(parse_program(src), Environment() if env is None else env)


class InterpreterTestCase(unittest.TestCase):

    def should_pass(self, cases):
        for case, result in cases.items():
            self.assertEqual(result, run(case), case)

    def should_fail(self, cases, exc):
        for case in cases:
            self.assertRaises(exc, run, case)

    def test_literals(self):
        self.should_pass({
            "": UNIT,
            "5": Integer(5),
            "5.5": Float(5.5),
            "\"five\"": String("five"),
            "true": Boolean(True),
            "()": UNIT,
            "(5)": Integer(5),
        })

    def test_arithmetic(self):
        self.should_pass({
            "+ 1 2 3": Integer(6),
            "- 10 1 2": Integer(7),
            "* 2 3 4": Integer(24),
            "/ 7 2": Integer(3),
            "/ (- 0 7) 2": Integer(-3),
            "% 7 3": Integer(1),
            "% (- 0 7) 2": Integer(-1),
            "+ 1.5 2.5": Float(4.0),
            "/ 7.0 2.0": Float(3.5),
            "% 7.5 2.0": Float(1.5),
            "+ 1 * 2 3": Integer(7),
            "+ \"foo\" \"bar\" \"baz\"": String("foobarbaz"),
        })

    def test_integer_wrap(self):
        self.should_pass({
            f"+ {INT_MAX} 1": Integer(INT_MIN),
            f"- (- 0 {INT_MAX}) 2": Integer(INT_MAX),
            f"* {INT_MAX} 2": Integer(-2),
        })

    def test_comparison(self):
        self.should_pass({
            "== 1 1": Boolean(True),
            "== 1 2 1": Boolean(True),
            "== 1 2 3": Boolean(False),
            "== \"a\" \"a\"": Boolean(True),
            "== () ()": Boolean(True),
            "== () 1": Boolean(False),
            "== 1 ()": Boolean(False),
            "< 1 2": Boolean(True),
            "< 3 2 5": Boolean(True),
            "< 3 2 1": Boolean(False),
            ">= 2.0 2.0": Boolean(True),
            "> \"b\" \"a\"": Boolean(True),
            "<= \"b\" \"a\"": Boolean(False),
        })

    def test_logic(self):
        self.should_pass({
            "&& true true": Boolean(True),
            "&& true true false": Boolean(False),
            "|| false false true": Boolean(True),
            "|| false false": Boolean(False),
            "! false": Boolean(True),
            "! && true false": Boolean(True),
        })

    def test_operator_errors(self):
        self.should_fail(["+ 1 2.0", "+ \"a\" 1", "- \"a\" \"b\"", "* true true", "== 1 \"1\"", "== 1 1.0",
                          "< true false", "< () ()", "&& 1 2", "|| true 1", "! 1"], errors.TypeError)
        self.should_fail(["+ 1", "+", "== 1", "&& true", "!", "! true false"], errors.ArityError)
        self.should_fail(["/ 10 0", "% 10 0", "/ 10 2 0", "/ 1.0 0.0", "% 1.0 0.0"], errors.DivisionByZero)

    def test_operands_evaluated_before_errors(self):
        env = Environment()
        self.assertRaises(errors.TypeError, run, "+ (= a 1) true", env)
        self.assertEqual(Integer(1), env.lookup("a"))

    def test_assignment(self):
        self.should_pass({
            "= x 5": Integer(5),
            "= x 5; x": Integer(5),
            "= foo 24; = foo \"bar\"; foo": String("bar"),
            "= x = y 3; + x y": Integer(6),
            "= x 5\nx": Integer(5),
            "= x 5\n+ x 1\n": Integer(6),
        })
        self.should_fail(["x", "= x y", "+ 1 x"], errors.NameError)

    def test_if(self):
        self.should_pass({
            "if true { 1 } else { 2 }": Integer(1),
            "if false { 1 } else { 2 }": Integer(2),
            "if false { 1 }": UNIT,
            "if true { }": UNIT,
            "if false { 1 } else if true { 2 } else { 3 }": Integer(2),
            "if false { 1 } elif false { 2 } else { 3 }": Integer(3),
            "if false { 1 } elif false { 2 }": UNIT,
            "if < 1 2 { \"yes\" } else { \"no\" }": String("yes"),
            "if true { = y 5 }; y": Integer(5),
            "= n 1; if == n 1 { 2; 3 }": Integer(3),
        })
        self.should_fail(["if 1 { 2 }", "if () { 2 }", "if \"true\" { 2 }", "if false { 1 } elif 0 { 2 }"],
                         errors.TypeError)

    def test_functions(self):
        self.assertIsInstance(run("{ [a] a }"), Function)
        self.should_pass({
            "= add { [a b] + a b }; add 1 2": Integer(3),
            "= random { 42 }; random ()": Integer(42),
            "= f { }; f ()": UNIT,
            "= f { [a] a }; f ()": UNIT,
            "= isunit { [a] == a () }; isunit ()": Boolean(True),
            "= isunit { [a] == a () }; isunit 5": Boolean(False),
            "= apply { [f x] f x }; apply { [n] * n n } 7": Integer(49),
            "= f { [a] = b + a 1; * b 2 }; f 4": Integer(10),
            "= f { 1 }; == f f": Boolean(True),
            "== { 1 } { 1 }": Boolean(False),
        })

    def test_call_errors(self):
        self.should_fail(["5 3", "\"f\" 1", "= x 5; x ()", "() ()"], errors.TypeError)
        self.should_fail(["= random { 42 }; random 1", "= f { [a b] a }; f 1", "= f { [a] a }; f 1 2",
                          "= f { [a] a }; f () ()"], errors.ArityError)

    def test_fib(self):
        src = "= fib { [n] if < n 2 { 1 } else { + (fib - n 1) (fib - n 2) } }; fib 12"
        self.assertEqual(Integer(233), run(src))

    def test_closures(self):
        self.should_pass({
            "= make { [x] { [] x } }; = five (make 5); = x 10; five ()": Integer(5),
            "= make { [x] { [] x } }; (make 5) ()": Integer(5),
            "= adder { [a] { [b] + a b } }; = add2 (adder 2); add2 3": Integer(5),
            "= x 1; = f { x }; = x 2; f ()": Integer(2),
        })

    def test_scoping(self):
        self.should_pass({
            "= count 0; = inc { = count + count 1 }; inc (); inc (); count": Integer(2),
            "= x 1; = f { [x] = x 2; x }; f 5": Integer(2),
            "= x 1; = f { [x] = x 2; x }; f 5; x": Integer(1),
        })
        self.should_fail(["= f { = local 1 }; f (); local"], errors.NameError)

    def test_session_env_persists(self):
        env = Environment()
        run("= x 5", env)
        run("= double { [n] * n 2 }", env)
        self.assertEqual(Integer(10), run("double x", env))

    def test_bindings_before_error_stay(self):
        env = Environment()
        self.assertRaises(errors.DivisionByZero, run, "= a 1; = b / 1 0; = c 2", env)
        self.assertIn("a", env)
        self.assertNotIn("b", env)
        self.assertNotIn("c", env)

    def test_error_location(self):
        with self.assertRaises(errors.TypeError) as cm:
            run("= x 1\n  + x 2.0")
        self.assertEqual((2, 3), (cm.exception.line, cm.exception.col))

        with self.assertRaises(errors.NameError) as cm:
            run("+ 1 missing")
        self.assertEqual((1, 5), (cm.exception.line, cm.exception.col))
        self.assertEqual("undefined variable missing", cm.exception.msg)

    def test_unbounded_recursion(self):
        self.assertRaises(RecursionError, run, "= loop { [n] loop n }; loop 1")


if __name__ == '__main__':
    unittest.main()
