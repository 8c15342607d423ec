"""
cmdapp help and version renderers.

What this module provides
- AppInfo: program metadata (name, version, author, year, description,
  synopsis lines and extra version text).
- render_help(registry, info): usage lines, description and an aligned
  options table, including the built-in --help/--version entries when no
  registered option shadows them.
- render_version(info): program/version header, copyright line and extra text.

Styling
- Palette entries can be overridden through a __styles__ mapping in __main__.
- When colorful is False, styling is suppressed entirely.
- When fancy is True, output is wrapped in a rich Panel.

Both renderers print to the given rich Console (stdout by default); they
never exit the process.
"""
import os.path
from collections import defaultdict
from typing import NamedTuple

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import *


class AppInfo(NamedTuple):
    """program metadata consumed by the help and version renderers."""
    program: str | None = None
    version: str | None = None
    author: str | None = None
    year: int | None = None
    descr: str | None = None
    synopses: tuple[str, ...] = ()
    extra: str | None = None


# built-in terminators and their help lines
BUILTINS = {
    "help": "display this help and exit",
    "version": "output version information and exit",
}


def _palette(defaults, colorful):
    styles = defaultdict(str, defaults | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        # Normalize to Rich Text. In non-colorful mode, strip styles.
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    return styler, text


def resolve_program(info=AppInfo(), program=Unset, argv=(), /):
    """
    Resolve the program name shown in help, version and fault output.

    An explicit program wins, then __main__.__prog__, then info.program, then
    the basename of argv[0], then "cmdapp".
    """
    fallback = os.path.basename(argv[0]) if argv and argv[0] else "cmdapp"
    return coalesce(program, getattr(__import__("__main__"), "__prog__", info.program or fallback))


def render_help(registry, info=AppInfo(), /, *, program=Unset, console=Unset, colorful=True, fancy=False):
    """
    Render help for a registry to the console.

    Palette keys
    - usage-label, program-name, usage-section, description-section
    - group-label, option-name, metavar, argument-description
    - panel-title
    """
    console = coalesce(console, Console())
    styler, text = _palette({
        "usage-label": "bold #00E6FF",  # CYAN → signature info color
        "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "usage-section": "bold #36C5F0",  # SKY-BLUE → softer than cyan
        "description-section": "italic #A3A3A3",  # Neutral gray
        "group-label": "bold #FFFFFF",  # Pure white headers
        "option-name": "bold #00E6FF",  # CYAN for options
        "metavar": "bold #FFD600",  # AMBER for parameters
        "argument-description": "#9CA3AF",  # Muted gray
        "panel-title": "bold #FF4D94",
    }, colorful)

    program = resolve_program(info, program)
    renders = []
    width = console.width - 4 * fancy  # Account for panel gutters when fancy=True

    # Usage: first synopsis on "usage:", the rest on aligned "or:" lines
    usage = Text()
    for index, synopsis in enumerate(info.synopses or ("[OPTION]... ARG...",)):
        if index:
            usage.append("\n").append("   or", styler("usage-label")).append(":")
        else:
            usage.append("usage", styler("usage-label")).append(":")
        usage.append(" ")
        usage.append(text(program, styler("program-name")))
        usage.append(" ")
        usage.append(text(synopsis, styler("usage-section")))
    renders.append(usage.append("\n"))

    if info.descr:
        renders.append(text(info.descr, styler("description-section")).append("\n"))

    rows = []
    for option in registry:
        label = Text()
        if option.short is not None:
            label.append(text("-" + option.short, styler("option-name")))
            if option.long is not None:
                label.append(", ")
        else:
            label.append("    ")
        if option.long is not None:
            label.append(text("--" + option.long, styler("option-name")))
        if option.takes_argument:
            label.append("=").append(text("ARG", styler("metavar")))
        rows.append((label, option.descr))

    for name, descr in BUILTINS.items():
        if "--" + name not in registry:
            rows.append((Text("    ").append(text("--" + name, styler("option-name"))), descr))

    padding = 2
    indent = padding + max(len(label) for label, _ in rows) + 2

    options = Text()
    options.append(text("options", styler("group-label"))).append(":").append("\n")
    for label, descr in rows:
        section = Text(" " * padding).append(label)
        if descr := text(descr, styler("argument-description")):
            section.append(" " * (indent - len(section)))
            wrapped = descr.wrap(console, max(width - indent, 1))
            try:
                section.append(wrapped.pop(0))
            except IndexError:
                pass
            for line in wrapped:
                section.append("\n").append(" " * indent).append(line)
        options.append(section).append("\n")
    renders.append(options)

    renders[-1].rstrip()

    renderable = Group(*renders)
    if fancy:
        renderable = Panel(
            renderable,
            title=Text.assemble("[", " ", f"{program} HELP".upper(), " ", "]", style=styler("panel-title")),
            title_align="left",
        )

    console.print(renderable)


def render_version(info=AppInfo(), /, *, program=Unset, console=Unset, colorful=True, fancy=False):
    """
    Render version information to the console.

    Layout
    - "<program> <version>"
    - "copyright (C) <year> <author>" when a year or author is known
    - the extra text, verbatim
    """
    console = coalesce(console, Console())
    styler, text = _palette({
        "program-name": "bold #FF4D94",  # Magenta-pink brand pop
        "program-version": "bold #00E6FF",  # Cyan version
        "copyright-label": "bold #FFFFFF",
        "copyright-section": "#9CA3AF",
        "extra-section": "#9CA3AF",
        "panel-title": "bold #FF4D94",
    }, colorful)

    program = resolve_program(info, program)
    renders = [Text(" ").join(part for part in (
        text(program, styler("program-name")),
        text(info.version, styler("program-version")),
    ) if part)]

    if info.year or info.author:
        copyright = Text()
        copyright.append(text("copyright", styler("copyright-label")))
        copyright.append(" (C) ")
        copyright.append(text(" ".join(str(part) for part in (info.year, info.author) if part), styler("copyright-section")))
        renders.append(copyright)

    if info.extra:
        renders.append(text(info.extra, styler("extra-section")))

    renderable = Group(*renders)
    if fancy:
        renderable = Panel(
            renderable,
            title=Text.assemble("[", " ", f"{program} VERSION".upper(), " ", "]", style=styler("panel-title")),
            title_align="left",
        )

    console.print(renderable)


__all__ = (
    "AppInfo",
    "render_help",
    "render_version",
    "resolve_program",
)
