"""Abstract syntax tree of the clip language. There is no statement/expression distinction: every node is an
expression and evaluates to exactly one Value. str() of a node gives back clip source for it.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Node:
    line: int
    col: int


@dataclass
class ExprNode(Node):
    pass


@dataclass
class SimpleLitExpr(ExprNode):
    pass


@dataclass
class BoolLitExpr(SimpleLitExpr):
    val: bool

    def __str__(self):
        return "true" if self.val else "false"

    __repr__ = __str__


@dataclass
class FloatLitExpr(SimpleLitExpr):
    val: float

    def __str__(self):
        return repr(self.val)

    __repr__ = __str__


@dataclass
class IntLitExpr(SimpleLitExpr):
    val: int

    def __str__(self):
        return repr(self.val)

    __repr__ = __str__


@dataclass
class StrLitExpr(SimpleLitExpr):
    val: str

    def __str__(self):
        return f"\"{self.val}\""

    __repr__ = __str__


@dataclass
class UnitExpr(SimpleLitExpr):
    def __str__(self):
        return "()"

    __repr__ = __str__


@dataclass
class AccessExpr(ExprNode):
    name: str

    def __str__(self):
        return self.name

    __repr__ = __str__


@dataclass
class AssignmentExpr(ExprNode):
    name: str
    val: ExprNode

    def __str__(self):
        return f"= {self.name} {self.val}"

    __repr__ = __str__


@dataclass
class OperatorExpr(ExprNode):
    symbol: str
    args: list[ExprNode] = field(default_factory=list)

    def __str__(self):
        return " ".join([self.symbol] + [group(arg) for arg in self.args])

    __repr__ = __str__


@dataclass
class FnLitExpr(ExprNode):
    param_names: list[str] = field(default_factory=list)
    body: list[ExprNode] = field(default_factory=list)

    def __str__(self):
        params = f"[{' '.join(self.param_names)}] " if self.param_names else ""
        return f"{{ {params}{block_body(self.body)}}}"

    __repr__ = __str__


@dataclass
class CallExpr(ExprNode):
    callee: ExprNode
    args: list[ExprNode]

    def __str__(self):
        return " ".join(group(node) for node in [self.callee] + self.args)

    __repr__ = __str__


@dataclass
class IfExpr(ExprNode):
    cond: ExprNode
    if_branch: list[ExprNode]
    else_branch: Optional[list[ExprNode]] = None

    def __str__(self):
        parts = [f"if {self.cond} {{ {block_body(self.if_branch)}}}"]
        if self.else_branch is not None:
            parts.append(f" else {{ {block_body(self.else_branch)}}}")
        return "".join(parts)

    __repr__ = __str__


def group(node):
    """str(node), parenthesized when it would otherwise swallow the expressions after it."""
    if isinstance(node, (CallExpr, OperatorExpr, AssignmentExpr, IfExpr)):
        return f"({node})"
    return str(node)


def block_body(body):
    return "".join(f"{node}; " for node in body)
