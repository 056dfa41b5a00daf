"""
Evaluates small inspection expressions such as ``location.get_chunk()`` or
``server.get_world('nether').spawn_location`` against a target object.

Only names, public attribute access, calls, subscripts and literals are allowed. A bare
name is looked up on the target unless it is one of the root names ``self``, ``sender``
or ``server``.
"""

import ast
from typing import Any, Dict
from .structured_logger import StructuredLogger


class EvaluationError(Exception):
    pass


class ExpressionEvaluator:

    def __init__(self, expression: str, target: Any, sender: Any = None, server: Any = None):
        self.expression = expression
        self.target = target
        self.roots: Dict[str, Any] = {
            'self': target,
            'sender': sender,
            'server': server,
        }

    def process(self) -> Any:
        logger = StructuredLogger(__name__, prefix="ExpressionEvaluator.process()> ")
        logger.debug2(f"evaluating '{self.expression}' against {self.target!r}")
        try:
            tree = ast.parse(self.expression.strip(), mode='eval')
        except SyntaxError as e:
            raise EvaluationError(f"invalid syntax: {e.msg}") from e
        except ValueError as e:
            # null bytes in the source on older interpreters
            raise EvaluationError(f"invalid expression: {e}") from e
        except (RecursionError, MemoryError) as e:
            raise EvaluationError("expression is nested too deeply") from e
        try:
            return self._evaluate(tree.body)
        except (RecursionError, MemoryError) as e:
            raise EvaluationError("expression is nested too deeply") from e

    def _evaluate(self, node: ast.AST) -> Any:
        if isinstance(node, ast.Constant):
            return node.value
        if isinstance(node, ast.Name):
            return self._lookup_name(node.id)
        if isinstance(node, ast.Attribute):
            return self._get_attribute(self._evaluate(node.value), node.attr)
        if isinstance(node, ast.Subscript):
            container = self._evaluate(node.value)
            index = self._evaluate(node.slice)
            try:
                return container[index]
            except (KeyError, IndexError, TypeError) as e:
                raise EvaluationError(f"cannot index {type(container).__name__} with {index!r}") from e
        if isinstance(node, ast.Call):
            return self._call(node)
        if isinstance(node, (ast.List, ast.Tuple)):
            values = [self._evaluate(element) for element in node.elts]
            return values if isinstance(node, ast.List) else tuple(values)
        if isinstance(node, ast.UnaryOp) and isinstance(node.op, ast.USub):
            operand = self._evaluate(node.operand)
            if isinstance(operand, (int, float)):
                return -operand
        raise EvaluationError(f"unsupported expression: {type(node).__name__}")

    def _lookup_name(self, name: str) -> Any:
        if name in self.roots:
            return self.roots[name]
        return self._get_attribute(self.target, name)

    @staticmethod
    def _get_attribute(obj: Any, name: str) -> Any:
        if name.startswith('_'):
            raise EvaluationError(f"access to '{name}' is not allowed")
        try:
            return getattr(obj, name)
        except AttributeError as e:
            raise EvaluationError(f"{type(obj).__name__} has no attribute '{name}'") from e

    def _call(self, node: ast.Call) -> Any:
        function = self._evaluate(node.func)
        if not callable(function):
            raise EvaluationError(f"{type(function).__name__} is not callable")
        args = [self._evaluate(arg) for arg in node.args]
        kwargs = {}
        for keyword in node.keywords:
            if keyword.arg is None:
                raise EvaluationError("argument unpacking is not allowed")
            kwargs[keyword.arg] = self._evaluate(keyword.value)
        try:
            return function(*args, **kwargs)
        except Exception as e:
            raise EvaluationError(f"{type(e).__name__}: {e}") from e
