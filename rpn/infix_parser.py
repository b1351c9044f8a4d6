"""中缀表达式解析器 - 调车场算法，支持一元负号和多参数函数"""
import logging

from config.config import PARSER_CONFIG
from rpn.errors import UnbalancedParentheses
from rpn.token_system import OPERATORS, TokenType, classify, tokenize

logger = logging.getLogger(__name__)

PRECEDENCE = 'precedence'
FUNCTION = 'function'


class _Frame:
    """每遇到一个左括号压入一层，记录它是优先级括号还是函数括号"""
    __slots__ = ('kind', 'arg_count', 'has_content')

    def __init__(self, kind):
        self.kind = kind
        # 函数括号内每个逗号加一，闭合时 +1 得到参数个数
        self.arg_count = 0
        # 括号内是否出现过非括号token，用于区分 sqrt() 和 sqrt(1)
        self.has_content = False


class InfixParser:
    """
    把中缀字符串转换为后缀token列表

        InfixParser('2 + 3 * 4').parse()
        => ['2', '3', '4', '*', '+']

        InfixParser('max(1 + 3, 2)').parse()
        => ['1', '3', '+', '2', '2', 'max']

    函数调用在后缀序列中以 "参数个数 函数名" 结尾。
    """

    def __init__(self, expression):
        self.expression = expression
        self._atoms = None

    @classmethod
    def from_atoms(cls, atoms):
        """使用已切分好的token构造"""
        parser = cls(' '.join(atoms))
        parser._atoms = list(atoms)
        return parser

    def parse(self):
        atoms = self._atoms if self._atoms is not None else tokenize(self.expression)
        self._reset()

        for atom in atoms:
            kind = classify(atom)

            if kind is TokenType.FUNCTION:
                self._handle_function(atom)
            elif kind is TokenType.OPERATOR:
                self._handle_operator(atom)
            elif kind is TokenType.COMMA:
                self._handle_comma()
            elif kind is TokenType.LPAREN:
                self._handle_opening_parenthesis()
            elif kind is TokenType.RPAREN:
                self._handle_closing_parenthesis()
            else:
                self._handle_operand(atom)

            # 紧跟在函数名后的左括号是函数括号
            self._after_function = kind is TokenType.FUNCTION

        # 剩余操作符按后进先出输出
        while self._op_stack:
            top = self._op_stack.pop()
            if top == '(':
                raise UnbalancedParentheses(f"unbalanced parentheses: missing ')' in {self.expression!r}")
            self._output.append(top)

        logger.debug(f"Parsed {self.expression!r} into {' '.join(self._output)}")
        return self._output

    def _reset(self):
        self._output = []
        self._op_stack = []
        self._frames = []
        # 表达式开头、左括号或逗号之后、任意操作符之后为True，此时遇到的操作符是一元的
        self._unary_context = True
        self._after_function = False

    def _mark_content(self):
        if self._frames:
            self._frames[-1].has_content = True

    # ================== 各类token处理 ==================

    def _handle_function(self, function):
        """函数名先压栈，闭合它的右括号负责输出"""
        self._mark_content()
        self._op_stack.append(function)

    def _handle_operator(self, operator):
        self._mark_content()

        if self._unary_context:
            # 一元 + 直接丢弃；一元 - 翻译为 "0 - 后续项"
            if operator == '-':
                self._output.append(PARSER_CONFIG["unary_minus_literal"])
                self._op_stack.append(operator)
        else:
            incoming = OPERATORS[operator]
            while self._op_stack and self._op_stack[-1] in OPERATORS \
                    and incoming.yields_to(OPERATORS[self._op_stack[-1]]):
                self._output.append(self._op_stack.pop())
            self._op_stack.append(operator)

        self._unary_context = True

    def _handle_comma(self):
        """逗号分隔函数参数：把当前参数里暂存的操作符全部输出"""
        self._mark_content()
        while self._op_stack and self._op_stack[-1] != '(':
            self._output.append(self._op_stack.pop())
        if self._frames:
            self._frames[-1].arg_count += 1
        # 逗号之后开始新的参数，与左括号之后相同
        self._unary_context = True

    def _handle_opening_parenthesis(self):
        self._op_stack.append('(')
        self._frames.append(_Frame(FUNCTION if self._after_function else PRECEDENCE))
        self._unary_context = True

    def _handle_closing_parenthesis(self):
        if not self._frames:
            raise UnbalancedParentheses(f"unbalanced parentheses: unexpected ')' in {self.expression!r}")

        frame = self._frames.pop()

        if frame.kind == PRECEDENCE and self._op_stack[-1] == '(':
            # 空的优先级括号，或括号内已无待输出的操作符
            self._op_stack.pop()
        else:
            while self._op_stack and self._op_stack[-1] != '(':
                self._output.append(self._op_stack.pop())
            if not self._op_stack:
                raise UnbalancedParentheses(f"unbalanced parentheses: unexpected ')' in {self.expression!r}")
            self._op_stack.pop()

            if frame.kind == FUNCTION:
                self._pop_function(frame)

        # 非空的括号组（包括零参数函数调用）让外层括号也变为非空
        if frame.has_content or frame.kind == FUNCTION:
            self._mark_content()

        self._unary_context = False

    def _handle_operand(self, operand):
        self._mark_content()
        self._output.append(operand)
        self._unary_context = False

    def _pop_function(self, frame):
        """函数括号闭合后输出参数个数和函数名"""
        arg_count = frame.arg_count + 1 if frame.has_content else 0
        self._output.append(str(arg_count))
        self._output.append(self._op_stack.pop())
