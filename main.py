import math

from rich.console import Console

from declarg import *

console = Console(highlight=False)

parser = Parser(
    [
        Option("int", "Values are considered as int.", "i"),
        Option("sentence", "Will print a sentence instead of the raw result.", "s"),
    ],
    [
        Positional("operation", "Operation evaluated on left and right values.", choices="add sub mult div"),
        Positional("left-value", "Left operand", type=float),
        Positional("right-value", "Right operand", type=float),
    ],
    description="Calculate the result of a binary operation.",
    required_positionals=3,
)


def truncate(value):
    return float(math.trunc(value)) if math.isfinite(value) else value


def divide(lhs, rhs):
    if rhs:
        return lhs / rhs
    # IEEE semantics for a zero divisor
    return math.copysign(math.inf, lhs) if lhs else math.nan


def calculate(results):
    lhs = results["left-value"].as_float
    rhs = results["right-value"].as_float
    integer = results["int"].specified
    if integer:
        lhs, rhs = truncate(lhs), truncate(rhs)

    match results["operation"].raw:
        case "add":
            return lhs, "+", rhs, lhs + rhs
        case "sub":
            return lhs, "-", rhs, lhs - rhs
        case "mult":
            return lhs, "*", rhs, lhs * rhs
        case "div":
            result = divide(lhs, rhs)
            return lhs, "/", rhs, truncate(result) if integer and rhs else result


if __name__ == '__main__':
    results = invoke(parser)
    lhs, symbol, rhs, result = calculate(results)
    if results["sentence"].specified:
        console.print("The result of %g %s %g is %g." % (lhs, symbol, rhs, result))
    else:
        console.print("%g" % result)
