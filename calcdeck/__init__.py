"""calcdeck: a deck of everyday calculators.

Pure formula functions for loans, investments, body metrics, dates, grades,
fractions and statistics, plus a chained (precedence-free) scientific
calculator evaluator. The CLI is a thin rich/typer layer over both.

Usage:
    python -m calcdeck list                          # Show calculators
    python -m calcdeck mortgage 300000 6.5 30        # Monthly payment
    python -m calcdeck keys 5 + 3 =                  # Keypad tokens -> display
    python -m calcdeck sci                           # Interactive calculator
"""

from calcdeck.evaluator import ChainedEvaluator

__all__ = ["ChainedEvaluator"]
