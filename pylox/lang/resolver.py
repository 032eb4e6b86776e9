"""Static binding resolution. Walks a program once before it runs and records, for every reference to a local
variable, how many scopes separate the reference from the declaration. References that are not found in any local
scope are left alone: the interpreter looks them up in the globals at runtime.

The same pass rejects programs that are syntactically fine but meaningless (see the error messages below).
"""

from enum import Enum, auto

from pylox.lang.ast import ExprVisitor, StmtVisitor


class FunctionType(Enum):
    NONE = auto()
    FUNCTION = auto()
    INITIALIZER = auto()
    METHOD = auto()


class ClassType(Enum):
    NONE = auto()
    CLASS = auto()
    SUBCLASS = auto()


class Resolver(ExprVisitor, StmtVisitor):
    """Resolves statements for interpreter, reporting static errors to error_handler."""

    def __init__(self, interpreter, error_handler):
        self.interpreter = interpreter
        self.error_handler = error_handler

        self.scopes = []  # innermost last; each maps name: whether its initializer has been resolved
        self.current_function = FunctionType.NONE
        self.current_class = ClassType.NONE

    def resolve(self, statements):
        for statement in statements:
            self._resolve(statement)

    def _resolve(self, node):
        node.accept(self)

    def _resolve_function(self, function, function_type):
        enclosing_function = self.current_function
        self.current_function = function_type

        self._begin_scope()
        for param in function.params:
            self._declare(param)
            self._define(param)
        self.resolve(function.body)
        self._end_scope()

        self.current_function = enclosing_function

    def _resolve_local(self, expr, name):
        for depth, scope in enumerate(reversed(self.scopes)):
            if name.lexeme in scope:
                self.interpreter.resolve(expr, depth)
                return

    def _begin_scope(self):
        self.scopes.append({})

    def _end_scope(self):
        self.scopes.pop()

    def _declare(self, name):
        """Globals are not tracked, so redeclaring one is allowed."""
        if not self.scopes:
            return

        scope = self.scopes[-1]
        if name.lexeme in scope:
            self.error_handler.token_error(name, "Already a variable with this name in this scope.")
        scope[name.lexeme] = False

    def _define(self, name):
        if not self.scopes:
            return
        self.scopes[-1][name.lexeme] = True

    # statements

    def visit_block_stmt(self, stmt):
        self._begin_scope()
        self.resolve(stmt.statements)
        self._end_scope()

    def visit_class_stmt(self, stmt):
        enclosing_class = self.current_class
        self.current_class = ClassType.CLASS

        self._declare(stmt.name)
        self._define(stmt.name)

        if stmt.superclass is not None:
            if stmt.name.lexeme == stmt.superclass.name.lexeme:
                self.error_handler.token_error(stmt.superclass.name, "A class can't inherit from itself.")

            self.current_class = ClassType.SUBCLASS
            self._resolve(stmt.superclass)

            self._begin_scope()
            self.scopes[-1]["super"] = True

        self._begin_scope()
        self.scopes[-1]["this"] = True

        for method in stmt.methods:
            declaration = FunctionType.INITIALIZER if method.name.lexeme == "init" else FunctionType.METHOD
            self._resolve_function(method, declaration)

        self._end_scope()

        if stmt.superclass is not None:
            self._end_scope()

        self.current_class = enclosing_class

    def visit_expression_stmt(self, stmt):
        self._resolve(stmt.expression)

    def visit_function_stmt(self, stmt):
        # defined before the body is resolved so the function can refer to itself
        self._declare(stmt.name)
        self._define(stmt.name)
        self._resolve_function(stmt, FunctionType.FUNCTION)

    def visit_if_stmt(self, stmt):
        self._resolve(stmt.condition)
        self._resolve(stmt.then_branch)
        if stmt.else_branch is not None:
            self._resolve(stmt.else_branch)

    def visit_print_stmt(self, stmt):
        self._resolve(stmt.expression)

    def visit_return_stmt(self, stmt):
        if self.current_function == FunctionType.NONE:
            self.error_handler.token_error(stmt.keyword, "Can't return from top-level code.")

        if stmt.value is not None:
            if self.current_function == FunctionType.INITIALIZER:
                self.error_handler.token_error(stmt.keyword, "Can't return a value from an initializer.")
            self._resolve(stmt.value)

    def visit_var_stmt(self, stmt):
        self._declare(stmt.name)
        if stmt.initializer is not None:
            self._resolve(stmt.initializer)
        self._define(stmt.name)

    def visit_while_stmt(self, stmt):
        self._resolve(stmt.condition)
        self._resolve(stmt.body)

    # expressions

    def visit_assign_expr(self, expr):
        self._resolve(expr.value)
        self._resolve_local(expr, expr.name)

    def visit_binary_expr(self, expr):
        self._resolve(expr.left)
        self._resolve(expr.right)

    def visit_call_expr(self, expr):
        self._resolve(expr.callee)
        for argument in expr.arguments:
            self._resolve(argument)

    def visit_get_expr(self, expr):
        # properties are looked up dynamically, only the object is resolved
        self._resolve(expr.object)

    def visit_grouping_expr(self, expr):
        self._resolve(expr.expression)

    def visit_literal_expr(self, expr):
        pass

    def visit_logical_expr(self, expr):
        self._resolve(expr.left)
        self._resolve(expr.right)

    def visit_set_expr(self, expr):
        self._resolve(expr.value)
        self._resolve(expr.object)

    def visit_super_expr(self, expr):
        if self.current_class == ClassType.NONE:
            self.error_handler.token_error(expr.keyword, "Can't use 'super' outside of a class.")
        elif self.current_class != ClassType.SUBCLASS:
            self.error_handler.token_error(expr.keyword, "Can't use 'super' in a class with no superclass.")

        self._resolve_local(expr, expr.keyword)

    def visit_ternary_expr(self, expr):
        self._resolve(expr.left)
        self._resolve(expr.middle)
        self._resolve(expr.right)

    def visit_this_expr(self, expr):
        if self.current_class == ClassType.NONE:
            self.error_handler.token_error(expr.keyword, "Can't use 'this' outside of a class.")
            return

        self._resolve_local(expr, expr.keyword)

    def visit_unary_expr(self, expr):
        self._resolve(expr.right)

    def visit_variable_expr(self, expr):
        if self.scopes and self.scopes[-1].get(expr.name.lexeme) is False:
            self.error_handler.token_error(expr.name, "Can't read local variable in its own initializer.")

        self._resolve_local(expr, expr.name)
