"""主程序入口 - 中缀/后缀表达式转换、求值与中缀还原"""
import argparse
import logging
import sys

import pandas as pd

from config.config import LOGGING_CONFIG, validate_config
from rpn import Expression, ExpressionError

logger = logging.getLogger(__name__)


def _binding(text):
    """解析 --var name=value"""
    name, sep, value = text.partition("=")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got {text!r}")
    return name.strip(), value.strip()


def build_parser():
    parser = argparse.ArgumentParser(description="Infix/postfix arithmetic calculator")

    parser.add_argument(
        "expression",
        type=str,
        help="Infix expression, or space separated postfix tokens with --postfix"
    )
    parser.add_argument(
        "--postfix",
        action="store_true",
        help="Treat the expression as space separated postfix tokens"
    )
    parser.add_argument(
        "--var",
        type=_binding,
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Bind a variable, e.g. --var x=2.5 (repeatable)"
    )
    parser.add_argument(
        "--data_path",
        type=str,
        default=None,
        help="CSV file whose columns are bound as vector variables"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail when more than one value is left on the stack"
    )
    parser.add_argument(
        "--log_level",
        type=str,
        default=LOGGING_CONFIG["level"],
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level"
    )
    return parser


def load_bindings(args):
    """CSV列在前，--var 覆盖同名变量"""
    bindings = {}
    if args.data_path:
        logger.info(f"Loading variables from {args.data_path}")
        data = pd.read_csv(args.data_path)
        logger.info(f"Data shape: {data.shape}")
        bindings.update({col: data[col] for col in data.columns})
    for name, value in args.var:
        bindings[name] = value
    return bindings


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format=LOGGING_CONFIG["format"]
    )
    validate_config()

    try:
        if args.postfix:
            expression = Expression.from_postfix(args.expression)
        else:
            expression = Expression.from_infix(args.expression)
        value = expression.evaluate(load_bindings(args), allow_partial=not args.strict)
        infix = expression.to_infix()
    except FileNotFoundError:
        logger.error(f"Data file not found: {args.data_path!r}")
        return 1
    except (ExpressionError, ArithmeticError) as e:
        logger.error(f"Error evaluating expression '{args.expression}': {type(e).__name__}: {e}")
        return 1

    print(f"postfix: {expression}")
    print(f"infix:   {infix}")
    if isinstance(value, pd.Series):
        print("value:")
        print(value.to_string())
    else:
        print(f"value:   {value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
