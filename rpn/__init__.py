"""核心模块 - Token系统、中缀解析器、RPN评估器和中缀还原"""
from .errors import (
    ExpressionError, UnbalancedParentheses, InsufficientOperands,
    InvalidTerm, ArityMismatch, ExcessOperands
)
from .token_system import (
    TokenType, Operator, Function, Arity, OPERATORS, FUNCTIONS,
    tokenize, parse_number, is_variable
)
from .operators import Operators
from .infix_parser import InfixParser
from .rpn_evaluator import RPNEvaluator, RPNValidator
from .infix_printer import Node, Leaf, BinaryNode, CallNode, InfixPrinter, build_tree
from .bindings import prepare_bindings
from .expression import Expression

__all__ = [
    'ExpressionError', 'UnbalancedParentheses', 'InsufficientOperands',
    'InvalidTerm', 'ArityMismatch', 'ExcessOperands',
    'TokenType', 'Operator', 'Function', 'Arity', 'OPERATORS', 'FUNCTIONS',
    'tokenize', 'parse_number', 'is_variable',
    'Operators', 'InfixParser', 'RPNEvaluator', 'RPNValidator',
    'Node', 'Leaf', 'BinaryNode', 'CallNode', 'InfixPrinter', 'build_tree',
    'prepare_bindings', 'Expression'
]
