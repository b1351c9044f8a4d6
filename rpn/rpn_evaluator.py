"""RPN表达式求值器 - 调用统一的Operators类"""
import logging
from decimal import localcontext

from config.config import DECIMAL_CONFIG, EVALUATOR_CONFIG
from rpn.errors import ExcessOperands, InsufficientOperands, InvalidTerm
from rpn.operators import is_vector
from rpn.token_system import (
    is_variable, lookup_function, lookup_operator, parse_argument_count, parse_number
)

logger = logging.getLogger(__name__)


class RPNEvaluator:
    """评估RPN表达式的值"""

    @staticmethod
    def evaluate(token_sequence, bindings=None, allow_partial=None):
        """
        评估RPN表达式
        Args:
            token_sequence: 后缀token序列
            bindings: 变量名（不含$）到值的字典，见 rpn.bindings.prepare_bindings
            allow_partial: 是否允许栈中剩余多个元素（只取栈顶）
        Returns:
            Decimal，或变量绑定为向量时的Series/数组
        """
        if allow_partial is None:
            allow_partial = EVALUATOR_CONFIG["allow_partial"]
        bindings = bindings or {}
        stack = []

        with localcontext() as ctx:
            ctx.prec = DECIMAL_CONFIG["precision"]
            ctx.rounding = DECIMAL_CONFIG["rounding"]

            for token in token_sequence:
                function = lookup_function(token)
                if function is not None:
                    # ================== 函数处理 ==================
                    arg_count = RPNEvaluator._pop_argument_count(stack, token)
                    if len(stack) < arg_count:
                        raise InsufficientOperands(
                            f"not enough operands on the stack for {token}: "
                            f"expected {arg_count}, got {len(stack)}"
                        )
                    args = stack[len(stack) - arg_count:]
                    del stack[len(stack) - arg_count:]
                    stack.append(function.apply(args))
                    continue

                operator = lookup_operator(token)
                if operator is not None:
                    # ================== 二元操作符处理 ==================
                    if len(stack) < 2:
                        raise InsufficientOperands(f"not enough operands on the stack for {token}")
                    operand2 = stack.pop()
                    operand1 = stack.pop()
                    stack.append(operator.operation(operand1, operand2))
                    continue

                stack.append(RPNEvaluator._resolve_term(token, bindings))

        # 返回结果处理
        if not stack:
            raise InsufficientOperands("empty expression")
        if len(stack) > 1:
            if not allow_partial:
                raise ExcessOperands(f"stack has {len(stack)} elements after evaluation, expected 1")
            logger.debug(f"Partial expression with {len(stack)} stack elements, returning top")
        return stack[-1]

    @staticmethod
    def _pop_argument_count(stack, function_name):
        if not stack:
            raise InsufficientOperands(f"missing argument count for {function_name}")
        value = stack.pop()
        if is_vector(value):
            raise InvalidTerm(f"argument count for {function_name} must be an integer, got a vector")
        arg_count = parse_argument_count(value)
        if arg_count is None:
            raise InvalidTerm(f"argument count for {function_name} must be a non-negative integer, got {value}")
        return arg_count

    @staticmethod
    def _resolve_term(token, bindings):
        """操作数：直接传入的向量、数字字面量或已绑定的变量"""
        if is_vector(token):
            return token

        number = parse_number(token)
        if number is not None:
            return number

        if is_variable(token):
            name = token[1:]
            if name not in bindings:
                raise InvalidTerm(f"unbound variable: {token}")
            return bindings[name]

        raise InvalidTerm(f"cannot handle term: {token!r}")


class RPNValidator:
    @staticmethod
    def calculate_stack_size(token_sequence):
        """
        模拟栈深度但不计算数值，出现下溢或无法识别的token时返回-1
        函数的参数个数取自前一个token的字面值
        """
        stack = []  # 只保存数字字面量，其余元素记为None

        for token in token_sequence:
            function = lookup_function(token)
            if function is not None:
                if not stack:
                    return -1
                arg_count = parse_argument_count(stack.pop())
                if arg_count is None or len(stack) < arg_count:
                    return -1
                del stack[len(stack) - arg_count:]
                stack.append(None)
            elif lookup_operator(token) is not None:
                if len(stack) < 2:
                    return -1
                del stack[-2:]
                stack.append(None)
            elif is_vector(token):
                stack.append(None)
            else:
                number = parse_number(token)
                if number is None and not is_variable(token):
                    return -1
                stack.append(number)

        return len(stack)

    @staticmethod
    def is_valid_expression(token_sequence):
        """完整表达式应该正好留下1个结果"""
        return RPNValidator.calculate_stack_size(token_sequence) == 1
