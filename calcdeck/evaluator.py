"""Chained (precedence-free) calculator evaluator.

Models a basic scientific calculator keypad: digits accumulate into a
display string, and each operator key evaluates whatever operation is
already pending before recording itself. ``2 + 3 × 4 =`` therefore shows
20, not 14; there is no precedence and no parentheses.

State is one of:
    Idle              nothing pending
    PendingOperand    a value is held but no operator (after '=')
    PendingOperation  a value and an operator await the right operand

The evaluator is not thread-safe; give each session its own instance.
"""

from __future__ import annotations

import math
import re
from collections import deque
from dataclasses import dataclass
from typing import Callable, Optional, Union

from calcdeck.arith import apply_operator, format_number, parse_number, parse_operator
from calcdeck.errors import InvalidInput
from calcdeck.models import HistoryEntry, Operator

# Past this n!, a float is infinite anyway
_MAX_FACTORIAL = 170

# Oldest evaluations are dropped past this many
DEFAULT_HISTORY_SIZE = 1000

_DIGITS_RE = re.compile(r"[0-9.]+")

EQUALS = "="


@dataclass(frozen=True)
class Idle:
    """No operand or operator pending."""


@dataclass(frozen=True)
class PendingOperand:
    """A result is held, waiting for an operator."""

    value: float


@dataclass(frozen=True)
class PendingOperation:
    """A left operand and operator wait for the right operand."""

    value: float
    operator: Operator


EvaluatorState = Union[Idle, PendingOperand, PendingOperation]


def _log(fn: Callable[[float], float]) -> Callable[[float], float]:
    """Logarithms run to -inf at zero instead of raising."""
    def wrapped(x: float) -> float:
        if x == 0:
            return float("-inf")
        return fn(x)
    return wrapped


class ChainedEvaluator:
    """Keypad-driven evaluator with one memory cell.

    Args:
        strict: Raise DivisionByZero/InvalidInput on undefined results
            instead of showing NaN or Infinity.
        on_change: Called with the display string after every operation.
        history_size: How many binary evaluations ``history`` keeps.
    """

    def __init__(
        self,
        strict: bool = False,
        on_change: Optional[Callable[[str], None]] = None,
        history_size: int = DEFAULT_HISTORY_SIZE,
    ) -> None:
        self.strict = strict
        self.on_change = on_change
        self.history: deque[HistoryEntry] = deque(maxlen=history_size)
        self._display = "0"
        self._state: EvaluatorState = Idle()
        self._memory = 0.0
        # Set after a result lands on the display; the next digit starts over
        self._fresh_entry = False

    # -- Observed state -----------------------------------------------------

    @property
    def display(self) -> str:
        return self._display

    @property
    def state(self) -> EvaluatorState:
        return self._state

    @property
    def memory(self) -> float:
        return self._memory

    def _value(self) -> float:
        return parse_number(self._display)

    def _show(self, value: float) -> None:
        self._display = format_number(value)
        self._fresh_entry = True

    def _notify(self) -> None:
        if self.on_change:
            self.on_change(self._display)

    # -- Entry --------------------------------------------------------------

    def clear(self) -> None:
        """Reset display and pending state. Memory and history are kept."""
        self._display = "0"
        self._state = Idle()
        self._fresh_entry = False
        self._notify()

    def clear_history(self) -> None:
        self.history.clear()

    def digit(self, value: Union[int, str]) -> None:
        """Type a digit (or '.') into the display."""
        text = str(value)
        if not _DIGITS_RE.fullmatch(text):
            raise InvalidInput(f"Not a digit: {value!r}")

        if self._fresh_entry:
            self._display = text
            self._fresh_entry = False
        elif self._display == "0":
            self._display = text
        else:
            self._display += text
        self._notify()

    def operator(self, symbol: Union[str, Operator]) -> None:
        """Enter a binary operator, or '=' to evaluate.

        A pending operation is evaluated first, left to right, and its
        result becomes the left operand of the new operator.
        """
        if symbol == EQUALS:
            self.evaluate()
            return

        op = parse_operator(symbol)
        value = self._value()
        if isinstance(self._state, PendingOperation):
            value = self._apply(self._state.value, self._state.operator, value)

        self._state = PendingOperation(value=value, operator=op)
        self._fresh_entry = True
        self._notify()

    def evaluate(self) -> None:
        """Complete the pending operation, if any."""
        value = self._value()
        if isinstance(self._state, PendingOperation):
            value = self._apply(self._state.value, self._state.operator, value)

        self._state = PendingOperand(value=value)
        self._fresh_entry = True
        self._notify()

    def _apply(self, left: float, op: Operator, right: float) -> float:
        result = apply_operator(left, right, op, strict=self.strict)
        self.history.append(HistoryEntry(left=left, operator=op, right=right, result=result))
        self._show(result)
        return result

    # -- Scientific functions (radians) -------------------------------------

    def _unary(self, name: str, fn: Callable[[float], float]) -> None:
        value = self._value()
        try:
            result = fn(value)
        except OverflowError:
            result = float("inf")
        except ValueError:
            # math domain error: sqrt(-1), log(-1), sin(inf)
            result = float("nan")

        if self.strict and math.isnan(result) and not math.isnan(value):
            raise InvalidInput(f"{name}({self._display}) is undefined")

        self._show(result)
        self._notify()

    def sin(self) -> None:
        self._unary("sin", math.sin)

    def cos(self) -> None:
        self._unary("cos", math.cos)

    def tan(self) -> None:
        self._unary("tan", math.tan)

    def log(self) -> None:
        """Base-10 logarithm."""
        self._unary("log", _log(math.log10))

    def ln(self) -> None:
        self._unary("ln", _log(math.log))

    def sqrt(self) -> None:
        self._unary("sqrt", math.sqrt)

    def square(self) -> None:
        self._unary("square", lambda x: x * x)

    def factorial(self) -> None:
        """n! of the displayed value.

        The value is truncated toward zero; n <= 0 gives 1 and anything past
        170! is Infinity.  In strict mode a negative or fractional value is
        rejected.
        """
        value = self._value()
        if self.strict and not (math.isfinite(value) and value >= 0 and value.is_integer()):
            raise InvalidInput(f"factorial({self._display}) needs a non-negative integer")

        n = math.trunc(value) if math.isfinite(value) else 0
        if n > _MAX_FACTORIAL:
            result = float("inf")
        else:
            result = 1.0
            for i in range(2, n + 1):
                result *= i

        self._show(result)
        self._notify()

    # -- Memory -------------------------------------------------------------

    def memory_clear(self) -> None:
        self._memory = 0.0
        self._notify()

    def memory_recall(self) -> None:
        self._show(self._memory)
        self._notify()

    def memory_add(self) -> None:
        self._memory += self._value()
        self._notify()

    def memory_subtract(self) -> None:
        self._memory -= self._value()
        self._notify()

    # -- Keypad dispatch ----------------------------------------------------

    def press(self, token: str) -> None:
        """Apply a single keypad token.

        Digits and '.', operators (+ - × ÷ ^ mod, aliases * / %), '=', the
        unary function names, and C / MC / MR / M+ / M-.
        """
        key = token.strip()
        if _DIGITS_RE.fullmatch(key):
            self.digit(key)
            return
        if key == EQUALS:
            self.evaluate()
            return

        action = self._keys().get(key.lower())
        if action:
            action()
            return

        try:
            op = parse_operator(key)
        except InvalidInput:
            raise InvalidInput(f"Unknown key: {token!r}") from None
        self.operator(op)

    def _keys(self) -> dict[str, Callable[[], None]]:
        return {
            "c": self.clear,
            "mc": self.memory_clear,
            "mr": self.memory_recall,
            "m+": self.memory_add,
            "m-": self.memory_subtract,
            "sin": self.sin,
            "cos": self.cos,
            "tan": self.tan,
            "log": self.log,
            "ln": self.ln,
            "sqrt": self.sqrt,
            "√": self.sqrt,
            "square": self.square,
            "x²": self.square,
            "factorial": self.factorial,
            "n!": self.factorial,
        }
