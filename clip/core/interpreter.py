"""Tree-walking evaluation of clip expressions against a chain of lexical Environments.

Evaluation is a plain recursive walk: every expression produces exactly one Value, and the first error aborts the
expression being evaluated. Bindings made before the error (even earlier in the same expression) stay.
"""

from clip.core import errors, nodes, ops
from clip.core.values import UNIT, Boolean, Float, Function, Integer, String


class Interpreter:
    def evaluate(self, expr, env):
        """Evaluates a single expression in env and returns its Value."""
        return self._evaluate_expr(expr, env)

    def evaluate_all(self, exprs, env):
        """Evaluates exprs in order in env, returning the value of the last one (Unit if there are none)."""
        result = UNIT
        for expr in exprs:
            result = self._evaluate_expr(expr, env)
        return result

    def _evaluate_expr(self, expr, env):
        if isinstance(expr, nodes.CallExpr):
            return self._evaluate_call_expr(expr, env)
        elif isinstance(expr, nodes.SimpleLitExpr):
            return self._evaluate_simple_lit_expr(expr)
        elif isinstance(expr, nodes.AccessExpr):
            return env.lookup(expr.name, expr.line, expr.col)
        elif isinstance(expr, nodes.AssignmentExpr):
            return self._evaluate_assignment_expr(expr, env)
        elif isinstance(expr, nodes.OperatorExpr):
            return self._evaluate_operator_expr(expr, env)
        elif isinstance(expr, nodes.FnLitExpr):
            return Function(tuple(expr.param_names), tuple(expr.body), env)
        elif isinstance(expr, nodes.IfExpr):
            return self._evaluate_if_expr(expr, env)
        else:
            raise errors.ClipError(f"unhandled expr node type: {type(expr).__name__}", expr.line, expr.col)

    def _evaluate_simple_lit_expr(self, lit):
        if isinstance(lit, nodes.IntLitExpr):
            return Integer(lit.val)
        elif isinstance(lit, nodes.FloatLitExpr):
            return Float(lit.val)
        elif isinstance(lit, nodes.StrLitExpr):
            return String(lit.val)
        elif isinstance(lit, nodes.BoolLitExpr):
            return Boolean(lit.val)
        return UNIT

    def _evaluate_assignment_expr(self, assign, env):
        val = self._evaluate_expr(assign.val, env)
        return env.assign(assign.name, val)

    def _evaluate_operator_expr(self, op, env):
        values = [self._evaluate_expr(arg, env) for arg in op.args]
        return ops.apply(op.symbol, values, op.line, op.col)

    def _evaluate_if_expr(self, if_expr, env):
        cond = self._evaluate_expr(if_expr.cond, env)
        if not isinstance(cond, Boolean):
            raise errors.TypeError(
                f"if condition must be of type boolean, got type {cond.type_name}", if_expr.line, if_expr.col
            )

        if cond.val:
            return self.evaluate_all(if_expr.if_branch, env)
        elif if_expr.else_branch is not None:
            return self.evaluate_all(if_expr.else_branch, env)
        return UNIT

    def _evaluate_call_expr(self, call, env):
        fn = self._evaluate_expr(call.callee, env)
        if not isinstance(fn, Function):
            raise errors.TypeError(
                f"cannot call {call.callee} of type {fn.type_name} as a function", call.line, call.col
            )

        # `f ()` is how a function without parameters gets called
        if not fn.param_names and len(call.args) == 1 and isinstance(call.args[0], nodes.UnitExpr):
            args = []
        else:
            args = [self._evaluate_expr(arg, env) for arg in call.args]

        if (want := len(fn.param_names)) != (got := len(args)):
            raise errors.ArityError(f"call {call.callee}: want {want}, got {got} args", call.line, call.col)

        call_env = fn.env.child(zip(fn.param_names, args))
        return self.evaluate_all(fn.body, call_env)


def evaluate(expr, env):
    """Evaluates expr in env. See Interpreter.evaluate."""
    return Interpreter().evaluate(expr, env)
