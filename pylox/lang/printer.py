"""Debug printer: renders a syntax tree as nested, Lisp-like parenthesized text. Used by the shell's ast command.

```
-123 * (45.67)           =>  (* (- 123) (group 45.67))
a ? b : c                =>  (?: a b c)
for (var i = 0; i < 2;) print i;
                         =>  (block (var i 0) (while (< i 2) (print i)))
```
"""

from pylox.lang.ast import ExprVisitor, StmtVisitor


class AstPrinter(ExprVisitor, StmtVisitor):

    def print(self, node):
        return node.accept(self)

    def _parenthesize(self, name, *parts):
        result = f"({name}"
        for part in parts:
            result += " " + (part if isinstance(part, str) else part.accept(self))
        return result + ")"

    @staticmethod
    def _literal(value):
        if value is None:
            return "nil"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, str):
            return f"\"{value}\""
        text = str(value)
        return text[:-2] if text.endswith(".0") else text

    # statements

    def visit_block_stmt(self, stmt):
        return self._parenthesize("block", *stmt.statements)

    def visit_class_stmt(self, stmt):
        name = stmt.name.lexeme
        if stmt.superclass is not None:
            name += " < " + stmt.superclass.name.lexeme
        return self._parenthesize(f"class {name}", *stmt.methods)

    def visit_expression_stmt(self, stmt):
        return self._parenthesize(";", stmt.expression)

    def visit_function_stmt(self, stmt):
        params = " ".join(param.lexeme for param in stmt.params)
        return self._parenthesize(f"fun {stmt.name.lexeme}({params})", *stmt.body)

    def visit_if_stmt(self, stmt):
        if stmt.else_branch is None:
            return self._parenthesize("if", stmt.condition, stmt.then_branch)
        return self._parenthesize("if-else", stmt.condition, stmt.then_branch, stmt.else_branch)

    def visit_print_stmt(self, stmt):
        return self._parenthesize("print", stmt.expression)

    def visit_return_stmt(self, stmt):
        if stmt.value is None:
            return "(return)"
        return self._parenthesize("return", stmt.value)

    def visit_var_stmt(self, stmt):
        if stmt.initializer is None:
            return self._parenthesize("var", stmt.name.lexeme)
        return self._parenthesize("var", stmt.name.lexeme, stmt.initializer)

    def visit_while_stmt(self, stmt):
        return self._parenthesize("while", stmt.condition, stmt.body)

    # expressions

    def visit_assign_expr(self, expr):
        return self._parenthesize("=", expr.name.lexeme, expr.value)

    def visit_binary_expr(self, expr):
        return self._parenthesize(expr.operator.lexeme, expr.left, expr.right)

    def visit_call_expr(self, expr):
        return self._parenthesize("call", expr.callee, *expr.arguments)

    def visit_get_expr(self, expr):
        return self._parenthesize(".", expr.object, expr.name.lexeme)

    def visit_grouping_expr(self, expr):
        return self._parenthesize("group", expr.expression)

    def visit_literal_expr(self, expr):
        return self._literal(expr.value)

    def visit_logical_expr(self, expr):
        return self._parenthesize(expr.operator.lexeme, expr.left, expr.right)

    def visit_set_expr(self, expr):
        return self._parenthesize("=", expr.object, expr.name.lexeme, expr.value)

    def visit_super_expr(self, expr):
        return self._parenthesize("super", expr.method.lexeme)

    def visit_ternary_expr(self, expr):
        return self._parenthesize(expr.operator.lexeme + expr.operator2.lexeme, expr.left, expr.middle, expr.right)

    def visit_this_expr(self, expr):
        return "this"

    def visit_unary_expr(self, expr):
        return self._parenthesize(expr.operator.lexeme, expr.right)

    def visit_variable_expr(self, expr):
        return expr.name.lexeme
