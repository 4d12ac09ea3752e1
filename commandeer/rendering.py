"""
Commandeer help rendering.

render(command) is a pure function of a node's declarations and returns a
rich Text. Command.help() hands out its plain form (what the send callback
receives) while printing the node itself through rich keeps the styles.

Layout (blank lines are significant, the text always ends with two newlines)

      Usage: pizza|order [options] <size>

      Commands:

        help [cmd]                 display help for [cmd]
        bake [options] <oven>      Bake it

      Order your pizza

      Options:

        -h, --help          output usage information
        -s, --size <size>   Pizza size

- The commands section only appears when the node has children; children
  declared with no_help are left out. Entries are "name|alias [options] args".
- The description paragraph only appears when one is set.
- The options section always lists the synthetic -h, --help row first; the
  flags column is as wide as the widest flags string.

Palette keys (override through a __styles__ mapping in __main__)
- usage-label, program-name, usage-section
- section-label, description
- command-name, command-description
- option-flags, option-description
"""
from collections import defaultdict

from rich.text import Text

from .arguments import humanize

HELP_FLAGS = "-h, --help"
HELP_DESCR = "output usage information"


def synopsis(command, /):
    """
    Default usage line: "[options]", " [command]" when the node has children,
    then the humanized arguments.
    """
    parts = ["[options]"]
    if command.children:
        parts.append("[command]")
    parts.extend(map(humanize, command.expected))
    return " ".join(parts)


def title(command, /):
    """
    "name|alias", or just the name.
    """
    return command.name + ("|" + alias if (alias := command.alias()) else "")


def entry(command, /):
    """
    One-line summary of a child in its parent's command list.
    """
    parts = [title(command)]
    if command.options:
        parts.append("[options]")
    parts.extend(map(humanize, command.expected))
    return " ".join(parts)


def render(command, /):
    """
    Build the help of a command node as rich Text.
    """
    styles = defaultdict(str, {
        # head
        "usage-label": "bold #00E6FF",
        "program-name": "bold #FF4D94",
        "usage-section": "bold #36C5F0",

        # sections
        "section-label": "bold #FFFFFF",
        "description": "italic #A3A3A3",

        # commands
        "command-name": "bold #36C5F0",
        "command-description": "#9CA3AF",

        # options
        "option-flags": "bold #22C55E",
        "option-description": "#9CA3AF",
    } | getattr(__import__("__main__"), "__styles__", {}))

    lines = [
        Text(),
        Text.assemble(
            "  ",
            ("Usage:", styles["usage-label"]),
            " ",
            (title(command), styles["program-name"]),
            " ",
            (command.usage(), styles["usage-section"]),
        ),
        Text(),
    ]

    if command.children:
        entries = [(entry(child), child.description()) for child in command.children if not child.no_help]
        width = max(map(len, (label for label, _ in entries)), default=0)
        lines += [Text(), Text.assemble("  ", ("Commands:", styles["section-label"])), Text()]
        for label, descr in entries:
            row = Text.assemble("    ", (label.ljust(width) if descr else label, styles["command-name"]))
            if descr:
                row.append("  " + descr, styles["command-description"])
            lines.append(row)
        lines.append(Text())

    if descr := command.description():
        lines += [Text.assemble("  ", (descr, styles["description"])), Text()]

    rows = [(HELP_FLAGS, HELP_DESCR)] + [(option.flags, option.descr) for option in command.options]
    width = max(len(flags) for flags, _ in rows)
    lines += [Text.assemble("  ", ("Options:", styles["section-label"])), Text()]
    for flags, descr in rows:
        lines.append(Text.assemble(
            "    ",
            (flags.ljust(width), styles["option-flags"]),
            "  ",
            (descr, styles["option-description"]),
        ))
    lines += [Text(), Text()]

    return Text("\n").join(lines)


__all__ = (
    "synopsis",
    "render",
)
