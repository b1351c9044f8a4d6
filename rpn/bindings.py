"""rpn/bindings.py"""
import logging
from collections.abc import Mapping
from typing import Dict, Optional, Union

import numpy as np
import pandas as pd

from config.config import PARSER_CONFIG
from rpn.errors import InvalidTerm
from rpn.token_system import parse_number

logger = logging.getLogger(__name__)


def _strip_prefix(name) -> str:
    name = str(name)
    prefix = PARSER_CONFIG["variable_prefix"]
    return name[len(prefix):] if name.startswith(prefix) else name


def prepare_bindings(data: Optional[Union[pd.DataFrame, Mapping]]) -> Dict:
    """
    准备变量绑定为字典格式 - 保持Series引用不变，避免重复创建
    键统一去掉$前缀；标量转为Decimal，数组/列表包装为与第一个Series共享索引的Series
    """
    if data is None:
        return {}

    if isinstance(data, pd.DataFrame):
        # 直接引用列
        return {_strip_prefix(col): data[col] for col in data.columns}

    if not isinstance(data, Mapping):
        raise TypeError(f"Unsupported bindings type: {type(data)}")

    ref_index = None
    for value in data.values():
        if isinstance(value, pd.Series):
            ref_index = value.index
            break

    prepared = {}
    for key, value in data.items():
        name = _strip_prefix(key)
        if isinstance(value, pd.Series):
            prepared[name] = value  # 直接引用，不复制
        elif isinstance(value, (np.ndarray, list, tuple)):
            values = np.asarray(value, dtype=float)
            if ref_index is not None and len(ref_index) == len(values):
                prepared[name] = pd.Series(values, index=ref_index)
            else:
                prepared[name] = pd.Series(values)
        else:
            number = parse_number(value)
            if number is None:
                raise InvalidTerm(f"cannot bind variable {key!r} to {value!r}")
            prepared[name] = number

    logger.debug(f"Prepared bindings for {sorted(prepared)}")
    return prepared
