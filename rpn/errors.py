"""rpn/errors.py"""


class ExpressionError(Exception):
    """所有表达式错误的基类"""


class UnbalancedParentheses(ExpressionError):
    """右括号没有对应的左括号，或左括号没有闭合"""


class InsufficientOperands(ExpressionError):
    """操作符或函数需要的操作数多于栈中现有的"""


class InvalidTerm(ExpressionError):
    """既不是操作符/函数，也无法解析为数字或变量的token"""


class ArityMismatch(ExpressionError):
    """固定参数个数的函数收到了过多参数"""


class ExcessOperands(ExpressionError):
    """严格模式下求值结束后栈中剩余多个值"""
