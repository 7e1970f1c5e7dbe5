from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

from projcalc.calculator import ProjectorCalculator
from projcalc.errors import InvalidArgument, ParseError
from projcalc.formatting import result_block, screen_info_table
from projcalc.models import BrightnessTarget

logger = logging.getLogger(__name__)

QUIT_COMMAND = "quit"


def run_interactive(
    calculator: ProjectorCalculator,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    """Prompt for target brightness values until 'quit' (any case) or end of input."""
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout

    def emit(text: str = "") -> None:
        stdout.write(text + "\n")

    emit("Projector Calculator - Interactive Mode")
    emit("=======================================")
    emit(screen_info_table(calculator.screen_info()))
    emit()
    emit(f"Enter target brightness in nits (or '{QUIT_COMMAND}' to exit):")

    count = 0
    while True:
        stdout.write("> ")
        stdout.flush()
        line = stdin.readline()
        if not line:
            emit()
            break
        text = line.strip()
        if text.lower() == QUIT_COMMAND:
            break
        if not text:
            continue
        try:
            target = BrightnessTarget.parse(text)
        except ParseError:
            emit(f"Please enter a valid number or '{QUIT_COMMAND}'")
            continue
        except InvalidArgument as e:
            emit(f"Please enter a brightness above zero ({e})")
            continue

        result = calculator.laser_power_for_nits(target.target_nits)
        emit(result_block(result))
        emit(f"  Achievable: {'Yes' if result.achievable else 'No'}")
        emit()
        count += 1

    logger.debug("Interactive session ended after %d calculation(s)", count)
    return 0
