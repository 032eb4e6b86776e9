"""Tree-walking evaluator for Lox.

Expressions evaluate to Python values (None, bool, float, str or a runtime object). Statements execute to an
outcome: None when they complete normally, or a runtime.Return when a return statement is unwinding towards the
function call that will consume it.
"""

import sys

from pylox.lang.ast import ExprVisitor, StmtVisitor
from pylox.lang.environment import Environment
from pylox.lang.error import LoxRuntimeError
from pylox.lang.runtime import NATIVES, LoxCallable, LoxClass, LoxFunction, LoxInstance, Return
from pylox.lang.tokens import TokenType


def is_truthy(value):
    """nil and false are falsy, everything else (0 and "" included) is truthy."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(left, right):
    """No coercion between types: in particular true != 1, unlike Python."""
    if left is None:
        return right is None
    if type(left) is not type(right):
        return False
    return left == right


def stringify(value):
    """Text shown by print. Integral numbers lose their ".0"; exponents are written 1E+16 and 1E-07."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        text = str(value)
        if text.endswith(".0"):
            text = text[:-2]
        return text.replace("e", "E")
    return str(value)


def _is_number(value):
    return isinstance(value, float)


class Interpreter(ExprVisitor, StmtVisitor):
    """Holds the global environment and the resolver's binding table, which both outlive a single call to
    interpret (a shell session reuses one Interpreter for every line).
    """

    def __init__(self, error_handler, out=None):
        self.error_handler = error_handler
        self.out = out

        self.globals = Environment()
        self.environment = self.globals
        self.locals = {}  # expr: hop count, keyed by node identity

        for native in NATIVES:
            self.globals.define(native.name, native)

    def interpret(self, statements):
        """Executes statements. A runtime error is reported and stops the rest of statements from running; whatever
        was defined before it stays defined.
        """
        try:
            for statement in statements:
                self.execute(statement)
        except LoxRuntimeError as error:
            self.error_handler.runtime_error(error)

    def resolve(self, expr, depth):
        """Called by the Resolver for every local variable reference."""
        self.locals[expr] = depth

    def evaluate(self, expr):
        return expr.accept(self)

    def execute(self, stmt):
        return stmt.accept(self)

    def execute_block(self, statements, environment):
        """Executes statements in environment, restoring the current environment afterwards, even on error."""
        previous = self.environment
        try:
            self.environment = environment
            for statement in statements:
                outcome = self.execute(statement)
                if outcome is not None:
                    return outcome
            return None
        finally:
            self.environment = previous

    def _look_up_variable(self, name, expr):
        distance = self.locals.get(expr)
        if distance is not None:
            return self.environment.get_at(distance, name.lexeme)
        return self.globals.get(name)

    def _write(self, text):
        print(text, file=self.out if self.out is not None else sys.stdout)

    # statements

    def visit_block_stmt(self, stmt):
        return self.execute_block(stmt.statements, Environment(self.environment))

    def visit_class_stmt(self, stmt):
        superclass = None
        if stmt.superclass is not None:
            superclass = self.evaluate(stmt.superclass)
            if not isinstance(superclass, LoxClass):
                raise LoxRuntimeError(stmt.superclass.name, "Superclass must be a class.")

        # bound first, assigned below: methods may refer to the class by name
        self.environment.define(stmt.name.lexeme, None)

        if superclass is not None:
            self.environment = Environment(self.environment)
            self.environment.define("super", superclass)

        methods = {}
        for method in stmt.methods:
            methods[method.name.lexeme] = LoxFunction(method, self.environment, method.name.lexeme == "init")

        klass = LoxClass(stmt.name.lexeme, superclass, methods)

        if superclass is not None:
            self.environment = self.environment.enclosing

        self.environment.assign(stmt.name, klass)
        return None

    def visit_expression_stmt(self, stmt):
        self.evaluate(stmt.expression)
        return None

    def visit_function_stmt(self, stmt):
        self.environment.define(stmt.name.lexeme, LoxFunction(stmt, self.environment))
        return None

    def visit_if_stmt(self, stmt):
        if is_truthy(self.evaluate(stmt.condition)):
            return self.execute(stmt.then_branch)
        elif stmt.else_branch is not None:
            return self.execute(stmt.else_branch)
        return None

    def visit_print_stmt(self, stmt):
        self._write(stringify(self.evaluate(stmt.expression)))
        return None

    def visit_return_stmt(self, stmt):
        value = None
        if stmt.value is not None:
            value = self.evaluate(stmt.value)
        return Return(value)

    def visit_var_stmt(self, stmt):
        value = None
        if stmt.initializer is not None:
            value = self.evaluate(stmt.initializer)
        self.environment.define(stmt.name.lexeme, value)
        return None

    def visit_while_stmt(self, stmt):
        while is_truthy(self.evaluate(stmt.condition)):
            outcome = self.execute(stmt.body)
            if outcome is not None:
                return outcome
        return None

    # expressions

    def visit_assign_expr(self, expr):
        value = self.evaluate(expr.value)

        distance = self.locals.get(expr)
        if distance is not None:
            self.environment.assign_at(distance, expr.name.lexeme, value)
        else:
            self.globals.assign(expr.name, value)

        return value

    def visit_binary_expr(self, expr):
        left = self.evaluate(expr.left)
        right = self.evaluate(expr.right)
        operator = expr.operator

        if operator.type == TokenType.PLUS:
            if _is_number(left) and _is_number(right):
                return left + right
            if (isinstance(left, str) or isinstance(right, str)) and all(
                    _is_number(operand) or isinstance(operand, str) for operand in (left, right)):
                return stringify(left) + stringify(right)
            raise LoxRuntimeError(operator, f"Operands ({stringify(left)}, {stringify(right)}) must be two numbers "
                                            f"or contain a string.")

        if operator.type == TokenType.BANG_EQUAL:
            return not is_equal(left, right)
        if operator.type == TokenType.EQUAL_EQUAL:
            return is_equal(left, right)

        self._check_number_operands(operator, left, right)

        if operator.type == TokenType.GREATER:
            return left > right
        if operator.type == TokenType.GREATER_EQUAL:
            return left >= right
        if operator.type == TokenType.LESS:
            return left < right
        if operator.type == TokenType.LESS_EQUAL:
            return left <= right
        if operator.type == TokenType.MINUS:
            return left - right
        if operator.type == TokenType.STAR:
            return left * right

        # the parser builds no other binary operator: this is "/"
        if right == 0:
            raise LoxRuntimeError(operator, "Division by zero.")
        return left / right

    def visit_call_expr(self, expr):
        callee = self.evaluate(expr.callee)

        # left to right, before the call: argument side effects are observable
        arguments = [self.evaluate(argument) for argument in expr.arguments]

        if not isinstance(callee, LoxCallable):
            raise LoxRuntimeError(expr.paren, "Can only call functions and classes.")

        if len(arguments) != callee.arity():
            raise LoxRuntimeError(expr.paren, f"Expected {callee.arity()} arguments but got {len(arguments)}.")

        return callee.call(self, arguments)

    def visit_get_expr(self, expr):
        obj = self.evaluate(expr.object)
        if isinstance(obj, LoxInstance):
            return obj.get(expr.name)
        raise LoxRuntimeError(expr.name, "Only instances have properties.")

    def visit_grouping_expr(self, expr):
        return self.evaluate(expr.expression)

    def visit_literal_expr(self, expr):
        return expr.value

    def visit_logical_expr(self, expr):
        left = self.evaluate(expr.left)

        if expr.operator.type == TokenType.OR:
            if is_truthy(left):
                return left
        elif not is_truthy(left):
            return left

        return self.evaluate(expr.right)

    def visit_set_expr(self, expr):
        obj = self.evaluate(expr.object)
        if not isinstance(obj, LoxInstance):
            raise LoxRuntimeError(expr.name, "Only instances have fields.")

        value = self.evaluate(expr.value)
        obj.set(expr.name, value)
        return value

    def visit_super_expr(self, expr):
        distance = self.locals[expr]
        superclass = self.environment.get_at(distance, "super")
        # "this" is always bound one frame inside the frame that binds "super"
        instance = self.environment.get_at(distance - 1, "this")

        method = superclass.find_method(expr.method.lexeme)
        if method is None:
            raise LoxRuntimeError(expr.method, f"Undefined property '{expr.method.lexeme}'.")
        return method.bind(instance)

    def visit_ternary_expr(self, expr):
        # all three operands are evaluated before one is picked
        left = self.evaluate(expr.left)
        middle = self.evaluate(expr.middle)
        right = self.evaluate(expr.right)
        return middle if is_truthy(left) else right

    def visit_this_expr(self, expr):
        return self._look_up_variable(expr.keyword, expr)

    def visit_unary_expr(self, expr):
        right = self.evaluate(expr.right)

        if expr.operator.type == TokenType.BANG:
            return not is_truthy(right)

        if not _is_number(right):
            raise LoxRuntimeError(expr.operator, f"Operand '{stringify(right)}' must be a number.")
        return -right

    def visit_variable_expr(self, expr):
        return self._look_up_variable(expr.name, expr)

    @staticmethod
    def _check_number_operands(operator, left, right):
        if _is_number(left) and _is_number(right):
            return
        raise LoxRuntimeError(operator, f"Operands ({stringify(left)}, {stringify(right)}) must be numbers.")
