"""Tree-walking evaluator for the calculator language."""

from __future__ import annotations

from .ast import Apply, ArrayLiteral, BinaryOp, Expr, Group, Identifier, Number
from .builtins import ASSIGNMENT_OPERATOR
from .environment import Environment
from .errors import BadExpressionError, EmptyGroupError, InvalidAssignmentTargetError
from .values import Array, Value, validate_value

RESULT_NAME = "_"


def _assign(expr: BinaryOp, env: Environment) -> Value:
    if not isinstance(expr.left, Identifier):
        raise InvalidAssignmentTargetError("invalid identifier: assignment target must be a name")
    value = _eval_expr(expr.right, env)
    env[expr.left.name] = value
    return value


def _eval_expr(expr: Expr, env: Environment) -> Value:
    if isinstance(expr, Number):
        return expr.value

    if isinstance(expr, ArrayLiteral):
        return Array(item.value for item in expr.values)

    if isinstance(expr, Identifier):
        return env.variable(expr.name)

    if isinstance(expr, Group):
        if expr.inner is None:
            raise EmptyGroupError("empty group has no value")
        return _eval_expr(expr.inner, env)

    if isinstance(expr, Apply):
        fn = env.function(expr.name)
        args = [_eval_expr(arg, env) for arg in expr.args]
        return fn.dispatch(env, *args)

    if isinstance(expr, BinaryOp):
        if expr.op == ASSIGNMENT_OPERATOR:
            return _assign(expr, env)
        op = env.operator(expr.op)
        left = _eval_expr(expr.left, env)
        right = _eval_expr(expr.right, env)
        return op.dispatch(env, left, right)

    raise BadExpressionError(f"Unsupported expression node: {type(expr)!r}")


def evaluate(env: Environment, expr: Expr) -> Value:
    """Evaluate ``expr`` against ``env`` and bind the result to ``_``."""
    result = _eval_expr(expr, env)
    validate_value(result, where="expression result")
    env[RESULT_NAME] = result
    return result
