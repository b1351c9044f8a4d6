"""配置文件"""

# Decimal运算参数
DECIMAL_CONFIG = {
    "precision": 28,  # 与decimal默认上下文一致
    "sqrt_precision": 28,  # sqrt至少需要5位小数
    "rounding": "ROUND_HALF_EVEN",
}

# 中缀解析参数
PARSER_CONFIG = {
    "unary_minus_literal": "0",  # 一元负号翻译为 "0 - x"
    "variable_prefix": "$",
}

# 求值参数
EVALUATOR_CONFIG = {
    "allow_partial": True,  # 栈中剩余多个值时只取栈顶
}

# 日志
LOGGING_CONFIG = {
    "level": "WARNING",
    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}


# 验证配置
def validate_config():
    """验证配置的合理性"""
    assert DECIMAL_CONFIG["precision"] >= 6, "精度过低"
    assert DECIMAL_CONFIG["sqrt_precision"] >= 6, "sqrt至少需要5位小数"
    assert PARSER_CONFIG["unary_minus_literal"] == "0", "一元负号必须翻译为 0 - x"
    assert PARSER_CONFIG["variable_prefix"] == "$", "变量必须以$开头"
    assert LOGGING_CONFIG["level"] in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
    return True
