"""Lox abstract syntax tree. Two closed sets of nodes, expressions and statements, each visited by double dispatch:
node.accept(visitor) calls visitor.visit_<node>_expr(node) or visitor.visit_<node>_stmt(node).

Nodes are immutable and compare/hash by identity (eq=False): the resolver annotates individual node instances, so two
structurally equal expressions in different places must stay distinct keys.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


class Expr:
    """Superclass of every expression node."""

    def accept(self, visitor):
        return getattr(visitor, f"visit_{type(self).__name__.lower()}_expr")(self)


class Stmt:
    """Superclass of every statement node."""

    def accept(self, visitor):
        return getattr(visitor, f"visit_{type(self).__name__.lower()}_stmt")(self)


# expressions

@dataclass(frozen=True, eq=False)
class Assign(Expr):
    name: object
    value: Expr


@dataclass(frozen=True, eq=False)
class Binary(Expr):
    left: Expr
    operator: object
    right: Expr


@dataclass(frozen=True, eq=False)
class Call(Expr):
    callee: Expr
    paren: object
    arguments: list


@dataclass(frozen=True, eq=False)
class Get(Expr):
    object: Expr
    name: object


@dataclass(frozen=True, eq=False)
class Grouping(Expr):
    expression: Expr


@dataclass(frozen=True, eq=False)
class Literal(Expr):
    value: object


@dataclass(frozen=True, eq=False)
class Logical(Expr):
    left: Expr
    operator: object
    right: Expr


@dataclass(frozen=True, eq=False)
class Set(Expr):
    object: Expr
    name: object
    value: Expr


@dataclass(frozen=True, eq=False)
class Super(Expr):
    keyword: object
    method: object


@dataclass(frozen=True, eq=False)
class Ternary(Expr):
    left: Expr
    operator: object
    middle: Expr
    operator2: object
    right: Expr


@dataclass(frozen=True, eq=False)
class This(Expr):
    keyword: object


@dataclass(frozen=True, eq=False)
class Unary(Expr):
    operator: object
    right: Expr


@dataclass(frozen=True, eq=False)
class Variable(Expr):
    name: object


# statements

@dataclass(frozen=True, eq=False)
class Block(Stmt):
    statements: list


@dataclass(frozen=True, eq=False)
class Expression(Stmt):
    expression: Expr


@dataclass(frozen=True, eq=False)
class Function(Stmt):
    name: object
    params: list
    body: list


@dataclass(frozen=True, eq=False)
class Class(Stmt):
    name: object
    superclass: Optional[Variable]
    methods: list


@dataclass(frozen=True, eq=False)
class If(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt]


@dataclass(frozen=True, eq=False)
class Print(Stmt):
    expression: Expr


@dataclass(frozen=True, eq=False)
class Return(Stmt):
    keyword: object
    value: Optional[Expr]


@dataclass(frozen=True, eq=False)
class Var(Stmt):
    name: object
    initializer: Optional[Expr]


@dataclass(frozen=True, eq=False)
class While(Stmt):
    condition: Expr
    body: Stmt


class ExprVisitor(ABC):
    """Every expression visitor must handle the full set of expression nodes."""

    @abstractmethod
    def visit_assign_expr(self, expr): ...

    @abstractmethod
    def visit_binary_expr(self, expr): ...

    @abstractmethod
    def visit_call_expr(self, expr): ...

    @abstractmethod
    def visit_get_expr(self, expr): ...

    @abstractmethod
    def visit_grouping_expr(self, expr): ...

    @abstractmethod
    def visit_literal_expr(self, expr): ...

    @abstractmethod
    def visit_logical_expr(self, expr): ...

    @abstractmethod
    def visit_set_expr(self, expr): ...

    @abstractmethod
    def visit_super_expr(self, expr): ...

    @abstractmethod
    def visit_ternary_expr(self, expr): ...

    @abstractmethod
    def visit_this_expr(self, expr): ...

    @abstractmethod
    def visit_unary_expr(self, expr): ...

    @abstractmethod
    def visit_variable_expr(self, expr): ...


class StmtVisitor(ABC):
    """Every statement visitor must handle the full set of statement nodes."""

    @abstractmethod
    def visit_block_stmt(self, stmt): ...

    @abstractmethod
    def visit_class_stmt(self, stmt): ...

    @abstractmethod
    def visit_expression_stmt(self, stmt): ...

    @abstractmethod
    def visit_function_stmt(self, stmt): ...

    @abstractmethod
    def visit_if_stmt(self, stmt): ...

    @abstractmethod
    def visit_print_stmt(self, stmt): ...

    @abstractmethod
    def visit_return_stmt(self, stmt): ...

    @abstractmethod
    def visit_var_stmt(self, stmt): ...

    @abstractmethod
    def visit_while_stmt(self, stmt): ...
