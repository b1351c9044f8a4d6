"""rpn/expression.py"""
import logging

from rpn.infix_parser import InfixParser
from rpn.infix_printer import InfixPrinter, build_tree
from rpn.rpn_evaluator import RPNEvaluator, RPNValidator
from rpn.token_system import is_variable
from rpn.bindings import prepare_bindings

logger = logging.getLogger(__name__)


class Expression:
    """
    后缀表达式，可以直接由token列表构造，也可以由中缀字符串解析：

        Expression(['20', '10', '+']).evaluate()
        => Decimal('30')

        Expression.from_infix('20 + 10').evaluate()
        => Decimal('30')

        Expression.from_infix('2 + 3 * 4').to_infix()
        => '2 + (3 * 4)'
    """

    def __init__(self, tokens):
        self._tokens = tuple(tokens)

    @classmethod
    def from_infix(cls, infix):
        return cls(InfixParser(infix).parse())

    @classmethod
    def from_postfix(cls, postfix):
        """以空白分隔的后缀字符串，例如 "1 2 2 max" """
        return cls(postfix.split())

    @property
    def tokens(self):
        return list(self._tokens)

    def evaluate(self, bindings=None, allow_partial=None):
        """
        Args:
            bindings: 变量绑定（dict或DataFrame），键可以带或不带$
            allow_partial: False时栈中剩余多个值会抛出 ExcessOperands
        """
        prepared = prepare_bindings(bindings)
        return RPNEvaluator.evaluate(self._tokens, prepared, allow_partial=allow_partial)

    def to_tree(self):
        return build_tree(self._tokens)

    def to_infix(self):
        return InfixPrinter().render(self.to_tree())

    def variables(self):
        """按首次出现顺序返回变量名（不含$）"""
        names = []
        for token in self._tokens:
            if is_variable(token) and token[1:] not in names:
                names.append(token[1:])
        return names

    def is_valid(self):
        return RPNValidator.is_valid_expression(self._tokens)

    def __len__(self):
        return len(self._tokens)

    def __str__(self):
        return ' '.join(str(token) for token in self._tokens)

    def __repr__(self):
        return f"Expression({list(self._tokens)!r})"
