"""
后缀表达式 -> 语法树 -> 中缀字符串
"""
import logging
from dataclasses import dataclass, field
from typing import Any, List

from rpn.errors import InsufficientOperands, InvalidTerm
from rpn.token_system import (
    OPERATORS, is_variable, lookup_function, lookup_operator, parse_argument_count, parse_number
)

logger = logging.getLogger(__name__)


@dataclass
class Node:
    """语法树节点基类"""


@dataclass
class Leaf(Node):
    """数字字面量或变量"""
    value: Any = None


@dataclass
class BinaryNode(Node):
    """left OP right"""
    operator: str = ""
    left: Node = None
    right: Node = None


@dataclass
class CallNode(Node):
    """name(arg0, arg1, ...)"""
    name: str = ""
    args: List[Node] = field(default_factory=list)


def build_tree(token_sequence) -> Node:
    """与求值相同的单次遍历，只是构造节点而不计算"""
    stack: List[Node] = []

    for token in token_sequence:
        if lookup_function(token) is not None:
            if not stack:
                raise InsufficientOperands(f"missing argument count for {token}")
            count_node = stack.pop()
            arg_count = parse_argument_count(count_node.value) if isinstance(count_node, Leaf) else None
            if arg_count is None:
                raise InvalidTerm(f"argument count for {token} must be a non-negative integer")
            if len(stack) < arg_count:
                raise InsufficientOperands(
                    f"not enough operands on the stack for {token}: expected {arg_count}, got {len(stack)}"
                )
            args = stack[len(stack) - arg_count:]
            del stack[len(stack) - arg_count:]
            stack.append(CallNode(name=token, args=args))

        elif lookup_operator(token) is not None:
            if len(stack) < 2:
                raise InsufficientOperands(f"not enough operands on the stack for {token}")
            right = stack.pop()
            left = stack.pop()
            stack.append(BinaryNode(operator=token, left=left, right=right))

        else:
            # 只校验token合法，数值本身不需要
            if parse_number(token) is None and not is_variable(token):
                raise InvalidTerm(f"cannot handle term: {token!r}")
            stack.append(Leaf(value=token))

    if not stack:
        raise InsufficientOperands("empty expression")
    if len(stack) > 1:
        logger.debug(f"Partial expression with {len(stack)} trees, rendering the last one")
    return stack[-1]


class InfixPrinter:
    """
    把语法树渲染为中缀字符串

    宁可多加括号也不能改变含义：二元节点的子节点在以下情况加括号
      * 子节点优先级低于父节点
      * 子节点是右子节点（此时必然不是叶子），例如 4 + (1 + 1)
      * 左子节点与右结合的父节点优先级相同，例如 (2 ^ 3) ^ 2
    """

    def render(self, node: Node) -> str:
        if isinstance(node, CallNode):
            args = ', '.join(self.render(arg) for arg in node.args)
            return f"{node.name}({args})"

        if isinstance(node, BinaryNode):
            left = self._render_child(node, node.left, is_right=False)
            right = self._render_child(node, node.right, is_right=True)
            return ' '.join([left, node.operator, right])

        return str(node.value)

    def _render_child(self, parent: BinaryNode, child: Node, is_right: bool) -> str:
        if self._needs_parentheses(parent, child, is_right):
            return f"({self.render(child)})"
        return self.render(child)

    @staticmethod
    def _needs_parentheses(parent: BinaryNode, child: Node, is_right: bool) -> bool:
        if not isinstance(child, BinaryNode):
            return False
        if is_right:
            return True

        parent_op = OPERATORS[parent.operator]
        child_op = OPERATORS[child.operator]
        if child_op.precedence < parent_op.precedence:
            return True
        return child_op.precedence == parent_op.precedence and parent_op.associativity == 'right'
