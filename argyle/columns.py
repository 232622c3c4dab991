"""
Argyle responsive column layout.

Scope
- render_columns(): lay out rows of cells as aligned, padded, word-wrapped
  columns for a given terminal width.
- breakpoints(): build a width-dependent options selector from a mapping of
  conditions ("> 80", ">= 40", "< 20", ...) to column options.

Column options (a mapping per column, or a bare width)
- width: "content-width" (widest cell), "auto" (share of the remaining
  space), "100%" (the column takes a full line) or an int (fixed width).
- padding_left / padding_right: spaces around the cell.
- padding_bottom: blank lines after the row (or after the cell, when stacked).
- preprocess: callable applied to each cell string before layout.

Table options
- a list of column options, or a mapping {"columns": [...], "stdout_columns": n}
  where stdout_columns replaces the terminal width (a huge value turns
  wrapping off).

Layout
- If any column is "100%", every row is stacked: each cell on its own lines,
  wrapped to the full width minus its padding.
- Otherwise cells sit side by side; "auto" columns wrap, the others do not.
- Cells may carry ANSI styles; they are parsed with rich and re-emitted.
  Trailing whitespace is stripped from every line.
"""
import operator
import re
from collections.abc import Mapping

from rich.color import ColorSystem
from rich.console import Console
from rich.text import Text

_CONDITION = re.compile(r"^\s*(>=|<=|>|<|=)\s*(\d+)\s*$")
_OPERATORS = {
    ">": operator.gt,
    ">=": operator.ge,
    "<": operator.lt,
    "<=": operator.le,
    "=": operator.eq,
}


def breakpoints(mapping, /):
    """
    Build a selector from "<op> <width>" conditions to table options.

    Conditions are tried in mapping order; the first satisfied one wins.
    When none matches, the selector returns None (default layout).
    """
    if not isinstance(mapping, Mapping):
        raise TypeError("breakpoints() argument must be a mapping")

    rules = []
    for condition, options in mapping.items():
        if not (match := _CONDITION.match(condition)):
            raise ValueError(f"Invalid breakpoint: {condition!r}")
        rules.append((_OPERATORS[match.group(1)], int(match.group(2)), options))

    def select(width):
        for compare, threshold, options in rules:
            if compare(width, threshold):
                return options
        return None

    return select


def _column(options):
    if options is None:
        options = {}
    elif not isinstance(options, Mapping):
        options = {"width": options}
    return {
        "width": options.get("width", "auto"),
        "padding_left": options.get("padding_left", 0),
        "padding_right": options.get("padding_right", 0),
        "padding_bottom": options.get("padding_bottom", 0),
        "preprocess": options.get("preprocess"),
    }


def _widest(lines):
    return max((line.cell_len for line in lines), default=0)


def _encode(console, line, colorful):
    if not colorful or not line.spans and not line.style:
        return line.plain
    return "".join(
        segment.style.render(segment.text, color_system=ColorSystem.STANDARD) if segment.style else segment.text
        for segment in line.render(console)
    )


def render_columns(rows, options=None, /, *, width=80, colorful=False):
    """
    Lay rows of cells out as text columns.

    Parameters
    - rows: iterable of rows; each row is an iterable of cell strings.
    - options: table options, or a selector from breakpoints().
    - width: the terminal width (in cells).
    - colorful: keep ANSI styles found in cells.

    Returns
    - str: the laid-out table, lines joined by "\\n", no trailing newline.
    """
    rows = [list(row) for row in rows]

    if callable(options):
        options = options(width)
    if isinstance(options, Mapping):
        width = options.get("stdout_columns", width)
        options = options.get("columns")

    count = max((len(row) for row in rows), default=0)
    columns = [_column(column) for column in (options or ())]
    columns.extend(_column(None) for _ in range(count - len(columns)))

    console = Console(width=max(width, 1), color_system="standard" if colorful else None, highlight=False)

    cells = []
    for row in rows:
        row = row + [""] * (count - len(row))
        parsed = []
        for column, cell in zip(columns, row):
            cell = "" if cell is None else str(cell)
            if column["preprocess"] is not None:
                cell = column["preprocess"](cell)
            parsed.append(Text.from_ansi(cell))
        cells.append(parsed)

    output = []

    if any(column["width"] == "100%" for column in columns):
        for row in cells:
            for column, cell in zip(columns, row):
                available = max(width - column["padding_left"] - column["padding_right"], 1)
                for line in cell.wrap(console, available):
                    output.append(" " * column["padding_left"] + _encode(console, line, colorful))
                output.extend([""] * column["padding_bottom"])
        return "\n".join(line.rstrip() for line in output)

    widths = []
    for index, column in enumerate(columns):
        match column["width"]:
            case int() as fixed:
                widths.append(fixed)
            case "content-width":
                widths.append(max((_widest(row[index].split("\n", allow_blank=True)) for row in cells), default=0))
            case _:
                widths.append(None)

    padding = sum(column["padding_left"] + column["padding_right"] for column in columns)
    remaining = width - padding - sum(value for value in widths if value is not None)
    flexible = [index for index, value in enumerate(widths) if value is None]
    for position, index in enumerate(flexible):
        share = remaining // len(flexible) + (position < remaining % len(flexible))
        widths[index] = max(share, 1)

    for row in cells:
        blocks = []
        for index, (column, cell) in enumerate(zip(columns, row)):
            if columns[index]["width"] == "content-width":
                lines = cell.split("\n", allow_blank=True)
            else:
                lines = cell.wrap(console, widths[index])
            blocks.append(lines)

        height = max((len(lines) for lines in blocks), default=0)
        for number in range(height):
            parts = []
            for index, (column, lines) in enumerate(zip(columns, blocks)):
                line = lines[number] if number < len(lines) else Text()
                fill = max(widths[index] - line.cell_len, 0)
                parts.append(" " * column["padding_left"])
                parts.append(_encode(console, line, colorful))
                parts.append(" " * (fill + column["padding_right"]))
            output.append("".join(parts).rstrip())

        output.extend([""] * max((column["padding_bottom"] for column in columns), default=0))

    return "\n".join(output)


__all__ = (
    "breakpoints",
    "render_columns",
)
