"""Numbered single-select menu used for the package, stack and database questions."""

import sys
from dataclasses import dataclass, field
from typing import Callable, TextIO


@dataclass
class MenuConfig:
    """I/O configuration for menu display and input."""

    input_fn: Callable[[str], str] = field(default_factory=lambda: input)
    output: TextIO = field(default_factory=lambda: sys.stderr)


def _display_options(label, options, default_index, output):
    print("", file=output)
    print(label, file=output)
    for i, (_, option_label) in enumerate(options):
        line = f"  {i + 1}) {option_label}"
        if i + 1 == default_index:
            line += " [default]"
        print(line, file=output)
    print("", file=output)


def _build_prompt_text(option_count, default_index):
    prompt_text = f"Enter your choice (1-{option_count})"
    if default_index:
        prompt_text += f" [default: {default_index}]"
    return prompt_text + ": "


def _read_choice(prompt_text, config):
    try:
        return config.input_fn(prompt_text).strip()
    except EOFError:
        print("", file=config.output)
        print("Input closed. Exiting.", file=config.output)
        sys.exit(0)


def _parse_choice(raw_input, options, default_index):
    if raw_input == "" and default_index:
        return default_index
    if raw_input.isdigit() and 1 <= int(raw_input) <= len(options):
        return int(raw_input)
    values = [value for value, _ in options]
    if raw_input in values:
        return values.index(raw_input) + 1
    return None


def _default_index(options, default):
    for i, (value, _) in enumerate(options):
        if value == default:
            return i + 1
    return None


def select(label, options, default=None, *, config=None):
    """Display numbered options and return the value the user picked.

    Args:
        label: Question shown above the options.
        options: List of (value, label) pairs.
        default: Value chosen on empty input.
        config: MenuConfig with input_fn and output stream (defaults apply).

    The answer may be the option number or the option value itself.

    Raises:
        SystemExit(0): On EOF (e.g. piped input closed).
    """
    if config is None:
        config = MenuConfig()

    default_index = _default_index(options, default)
    _display_options(label, options, default_index, config.output)
    prompt_text = _build_prompt_text(len(options), default_index)

    while True:
        parsed = _parse_choice(_read_choice(prompt_text, config), options, default_index)
        if parsed is not None:
            return options[parsed - 1][0]
        print(
            f"Invalid choice. Please enter a number between 1 and {len(options)}.",
            file=config.output,
        )
