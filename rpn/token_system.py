"""rpn/token_system.py"""
import re
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Callable, List, NamedTuple, Optional

import numpy as np

from rpn.errors import ArityMismatch, InsufficientOperands
from rpn.operators import Operators


class TokenType(Enum):
    NUMBER = "number"
    VARIABLE = "variable"
    OPERATOR = "operator"
    FUNCTION = "function"
    LPAREN = "lparen"
    RPAREN = "rparen"
    COMMA = "comma"
    UNKNOWN = "unknown"  # 求值或建树时报 InvalidTerm


class Operator(NamedTuple):
    symbol: str
    precedence: int
    operation: Callable
    associativity: str = "left"

    def yields_to(self, other):
        """
        输入的操作符(self)遇到栈顶操作符(other)时，other是否应先输出
        other优先级更高，或优先级相同且other为左结合
        """
        if other.precedence > self.precedence:
            return True
        return other.precedence == self.precedence and other.associativity == "left"


class Arity(NamedTuple):
    minimum: int
    maximum: Optional[int]  # None 表示可变参数

    @classmethod
    def fixed(cls, count):
        return cls(count, count)

    @classmethod
    def variadic(cls, minimum=1):
        return cls(minimum, None)

    @property
    def is_variadic(self):
        return self.maximum is None


class Function(NamedTuple):
    name: str
    arity: Arity
    compute: Callable

    def apply(self, args):
        """检查参数个数后调用"""
        if len(args) < self.arity.minimum:
            raise InsufficientOperands(
                f"{self.name} needs at least {self.arity.minimum} argument(s), got {len(args)}"
            )
        if self.arity.maximum is not None and len(args) > self.arity.maximum:
            raise ArityMismatch(
                f"{self.name} takes {self.arity.maximum} argument(s), got {len(args)}"
            )
        return self.compute(*args)


# 操作符定义字典
OPERATORS = MappingProxyType({
    '^': Operator('^', 4, Operators.pow, 'right'),
    '/': Operator('/', 3, Operators.div),
    '*': Operator('*', 3, Operators.mul),
    '%': Operator('%', 3, Operators.mod),
    '-': Operator('-', 2, Operators.sub),
    '+': Operator('+', 2, Operators.add),
})

# 函数定义字典
FUNCTIONS = MappingProxyType({
    'sqrt': Function('sqrt', Arity.fixed(1), Operators.sqrt),
    'sin': Function('sin', Arity.fixed(1), Operators.sin),
    'max': Function('max', Arity.variadic(), Operators.max),
    'min': Function('min', Arity.variadic(), Operators.min),
    'mean': Function('mean', Arity.variadic(), Operators.mean),
    'avg': Function('avg', Arity.variadic(), Operators.mean),
    'median': Function('median', Arity.variadic(), Operators.median),
    'mode': Function('mode', Arity.variadic(), Operators.mode),
})

NUMBER_RE = re.compile(r'\d*\.?\d+(?:[eE][+-]?\d+)?')
# 直接传入的后缀token允许带符号，例如 ['-5', '2', '*']
SIGNED_NUMBER_RE = re.compile(r'[+-]?\d*\.?\d+(?:[eE][+-]?\d+)?')
VARIABLE_RE = re.compile(r'\$[a-z]+')

_OPERATOR_CHARS = ''.join(re.escape(symbol) for symbol in OPERATORS)

# 按位置依次尝试：数字、变量、括号和逗号、操作符，其余连续字符整体作为一个token
# 函数名落在最后一类里，例如 sqrt(x) 切分为 sqrt ( x )
_TOKEN_SPLIT_RE = re.compile(
    rf'(?P<number>{NUMBER_RE.pattern})'
    rf'|(?P<variable>{VARIABLE_RE.pattern})'
    r'|(?P<punct>[(),])'
    rf'|(?P<operator>[{_OPERATOR_CHARS}])'
    rf'|(?P<word>[^\s(),{_OPERATOR_CHARS}]+)'
)


def tokenize(expression: str) -> List[str]:
    """
    把中缀字符串切分为token列表，token之间的空白被忽略

        "20*(-4.1+5)^4"
        => ['20', '*', '(', '-', '4.1', '+', '5', ')', '^', '4']
    """
    return [m.group(0) for m in _TOKEN_SPLIT_RE.finditer(expression)]


def lookup_operator(token) -> Optional[Operator]:
    if isinstance(token, str):
        return OPERATORS.get(token)
    return None


def lookup_function(token) -> Optional[Function]:
    if isinstance(token, str):
        return FUNCTIONS.get(token)
    return None


def is_variable(token) -> bool:
    return isinstance(token, str) and VARIABLE_RE.fullmatch(token) is not None


def parse_number(term) -> Optional[Decimal]:
    """把token解析为Decimal，无法解析时返回None"""
    if isinstance(term, Decimal):
        return term
    if isinstance(term, bool):
        return None
    if isinstance(term, (int, np.integer)):
        return Decimal(int(term))
    if isinstance(term, (float, np.floating)):
        # 用str避免 0.1 变成二进制展开
        return Decimal(str(float(term)))
    if isinstance(term, str) and SIGNED_NUMBER_RE.fullmatch(term):
        return Decimal(term)
    return None


def parse_argument_count(term) -> Optional[int]:
    """函数前的参数个数token必须是非负整数"""
    number = parse_number(term)
    if number is None or not number.is_finite() or number < 0:
        return None
    if number != number.to_integral_value():
        return None
    return int(number)


def classify(token) -> TokenType:
    if not isinstance(token, str):
        return TokenType.NUMBER if parse_number(token) is not None else TokenType.UNKNOWN
    if lookup_function(token) is not None:
        return TokenType.FUNCTION
    if lookup_operator(token) is not None:
        return TokenType.OPERATOR
    if token == '(':
        return TokenType.LPAREN
    if token == ')':
        return TokenType.RPAREN
    if token == ',':
        return TokenType.COMMA
    if is_variable(token):
        return TokenType.VARIABLE
    if parse_number(token) is not None:
        return TokenType.NUMBER
    return TokenType.UNKNOWN
