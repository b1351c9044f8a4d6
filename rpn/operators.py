"""rpn/operators.py"""
import logging
import operator
import statistics
from decimal import Decimal, localcontext
from functools import reduce

import numpy as np
import pandas as pd
from scipy import stats

from config.config import DECIMAL_CONFIG

logger = logging.getLogger(__name__)


def is_vector(operand):
    """变量绑定到Series或数组时走向量计算"""
    return isinstance(operand, (pd.Series, np.ndarray))


class Operators:
    """所有操作符和函数的静态方法集合：标量用Decimal，向量用numpy/pandas"""

    @staticmethod
    def _to_float(operand):
        if isinstance(operand, Decimal):
            return float(operand)
        return operand

    @staticmethod
    def _align_operands(*operands):
        """有向量参与时，把Decimal标量转换为float"""
        if any(is_vector(operand) for operand in operands):
            return tuple(Operators._to_float(operand) for operand in operands)
        return operands

    @staticmethod
    def _stack_operands(operands):
        """把标量和向量广播成同形状后按行堆叠，返回 (二维数组, 参考索引)"""
        index = None
        for operand in operands:
            if isinstance(operand, pd.Series):
                index = operand.index
                break
        arrays = [np.asarray(operand, dtype=float) for operand in operands]
        return np.vstack(np.broadcast_arrays(*arrays)), index

    @staticmethod
    def _wrap_result(result, index):
        """保持输入Series的索引"""
        if index is not None:
            return pd.Series(result, index=index)
        return result

    # 二元操作符========================================

    @staticmethod
    def add(operand1, operand2):
        """加法操作符"""
        operand1, operand2 = Operators._align_operands(operand1, operand2)
        return operand1 + operand2

    @staticmethod
    def sub(operand1, operand2):
        """减法操作符"""
        operand1, operand2 = Operators._align_operands(operand1, operand2)
        return operand1 - operand2

    @staticmethod
    def mul(operand1, operand2):
        """乘法操作符"""
        operand1, operand2 = Operators._align_operands(operand1, operand2)
        return operand1 * operand2

    @staticmethod
    def div(operand1, operand2):
        """除法操作符；标量除零时抛出decimal.DivisionByZero，向量除零得到inf"""
        if is_vector(operand1) or is_vector(operand2):
            operand1, operand2 = Operators._align_operands(operand1, operand2)
            with np.errstate(divide='ignore', invalid='ignore'):
                return np.true_divide(operand1, operand2)
        return operand1 / operand2

    @staticmethod
    def mod(operand1, operand2):
        """向下取整的取模，非零结果符号与除数一致（向量用np.mod，语义相同）"""
        if is_vector(operand1) or is_vector(operand2):
            operand1, operand2 = Operators._align_operands(operand1, operand2)
            with np.errstate(divide='ignore', invalid='ignore'):
                return np.mod(operand1, operand2)
        # Decimal的 % 结果与被除数同号，异号时补一个除数
        remainder = operand1 % operand2
        if remainder and (remainder < 0) != (operand2 < 0):
            remainder += operand2
        return remainder

    @staticmethod
    def pow(operand1, operand2):
        """乘方操作符"""
        if is_vector(operand1) or is_vector(operand2):
            operand1, operand2 = Operators._align_operands(operand1, operand2)
            with np.errstate(over='ignore', invalid='ignore'):
                return np.float_power(operand1, operand2)
        return operand1 ** operand2

    # 一元函数====================

    @staticmethod
    def sqrt(operand):
        """平方根，精度由 DECIMAL_CONFIG['sqrt_precision'] 决定"""
        if is_vector(operand):
            with np.errstate(invalid='ignore'):
                return np.sqrt(operand)
        with localcontext() as ctx:
            ctx.prec = DECIMAL_CONFIG["sqrt_precision"]
            return operand.sqrt()

    @staticmethod
    def sin(operand):
        """正弦（弧度）"""
        if is_vector(operand):
            return np.sin(operand)
        return Decimal(float(np.sin(float(operand))))

    # 可变参数函数====================

    @staticmethod
    def max(*operands):
        operands = Operators._align_operands(*operands)
        if any(is_vector(operand) for operand in operands):
            return reduce(np.maximum, operands)
        return max(operands)

    @staticmethod
    def min(*operands):
        operands = Operators._align_operands(*operands)
        if any(is_vector(operand) for operand in operands):
            return reduce(np.minimum, operands)
        return min(operands)

    @staticmethod
    def mean(*operands):
        """算术平均"""
        operands = Operators._align_operands(*operands)
        return reduce(operator.add, operands) / len(operands)

    @staticmethod
    def median(*operands):
        """中位数；偶数个参数时取中间两个的平均"""
        if any(is_vector(operand) for operand in operands):
            stacked, index = Operators._stack_operands(operands)
            return Operators._wrap_result(np.median(stacked, axis=0), index)
        return statistics.median(operands)

    @staticmethod
    def mode(*operands):
        """众数；标量时并列取最先出现的值，向量时并列取最小值（scipy语义）"""
        if any(is_vector(operand) for operand in operands):
            stacked, index = Operators._stack_operands(operands)
            result = stats.mode(stacked, axis=0, keepdims=False).mode
            return Operators._wrap_result(result, index)
        return statistics.mode(operands)
