"""Classification and validation of the texture and colour lines of a scene."""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence

from cubcaster.models import Element, ElementLine
from cubcaster.textutil import is_space, split_words

_WHITESPACE = "\t\n\v\f\r "
_INT_MAX = 2**31 - 1

_PREFIXES: tuple[tuple[str, Element], ...] = (
    ("N ", Element.NORTH),
    ("NO ", Element.NORTH),
    ("S ", Element.SOUTH),
    ("SO ", Element.SOUTH),
    ("W ", Element.WEST),
    ("WE ", Element.WEST),
    ("E ", Element.EAST),
    ("EA ", Element.EAST),
    ("F ", Element.FLOOR),
    ("C ", Element.CEILING),
)


def _is_blank(text: str) -> bool:
    return all(is_space(ch) for ch in text)


def strip_value(kind: Element, text: str) -> str | None:
    """Clean the value part of a line, or return None if it is empty or malformed.

    Element values are a single whitespace-free word; map rows (``Element.NONE``)
    keep everything up to the newline, leading and inner spaces included.
    """
    i = 0
    n = len(text)
    if kind is not Element.NONE:
        while i < n and is_space(text[i]):
            i += 1
    start = i
    if kind is Element.NONE:
        while i < n and text[i] != "\n":
            i += 1
    while i < n and not is_space(text[i]):
        i += 1
    end = i
    while i < n and is_space(text[i]):
        i += 1
    if i < n:
        return None
    return text[start:end] or None


def classify_line(text: str) -> tuple[Element, str]:
    """Return the kind of a line and the text after its identifier."""
    for prefix, kind in _PREFIXES:
        if text.startswith(prefix):
            return kind, text[len(prefix):]
    return Element.NONE, text


def split_sections(lines: Sequence[str]) -> tuple[list[ElementLine], list[str]]:
    """Split raw file lines into element lines and map rows.

    Elements are read until the first line that is not an element; from that
    line on, every non-blank line belongs to the map. Lines whose value is
    malformed are dropped.
    """
    elements: list[ElementLine] = []
    map_start = len(lines)
    index = 0
    while index < len(lines):
        while index < len(lines) and _is_blank(lines[index]):
            index += 1
        if index >= len(lines):
            break
        kind, rest = classify_line(lines[index].lstrip(_WHITESPACE))
        if kind is Element.NONE:
            map_start = index
            break
        value = strip_value(kind, rest)
        if value is not None:
            elements.append(ElementLine(kind, value))
        index += 1

    rows: list[str] = []
    for line in lines[map_start:]:
        if _is_blank(line):
            continue
        kind, rest = classify_line(line)
        value = strip_value(kind, rest)
        if value is not None:
            rows.append(value)
    return elements, rows


def parse_color_component(text: str) -> int:
    """Parse one colour component: unsigned decimal, leading blanks allowed.

    The value is reduced modulo 256. Raises ValueError for anything else or
    for values above the 32-bit signed maximum.
    """
    digits = text.lstrip(_WHITESPACE)
    if not digits:
        raise ValueError(f"empty colour component: {text!r}")
    if not (digits.isascii() and digits.isdigit()):
        raise ValueError(f"invalid colour component: {text!r}")
    value = int(digits)
    if value > _INT_MAX:
        raise ValueError(f"colour component out of range: {text!r}")
    return value % 256


def _component_is_valid(text: str) -> bool:
    try:
        parse_color_component(text)
    except ValueError:
        return False
    return True


def is_valid_color(text: str) -> bool:
    """True if the text holds exactly three valid comma-separated components."""
    parts = split_words(text, ",")
    return len(parts) == 3 and all(_component_is_valid(part) for part in parts)


def color_to_rgba(text: str) -> int:
    """Turn an ``R,G,B`` value into a 32-bit RGBA integer with full alpha."""
    if not is_valid_color(text):
        raise ValueError(f"invalid colour: {text!r}")
    red, green, blue = (parse_color_component(part) for part in split_words(text, ","))
    return (red << 24) | (green << 16) | (blue << 8) | 0xFF


def order_is_valid(elements: Sequence[ElementLine]) -> bool:
    """True if the elements run NO, SO, WE, EA, F, C exactly in that order."""
    if not elements:
        return False
    if elements[0].kind != Element.NORTH:
        return False
    for previous, current in zip(elements, elements[1:]):
        if current.kind != previous.kind + 1:
            return False
    return elements[-1].kind == Element.CEILING


def is_x_filetype(name: str | None, extension: str) -> bool:
    """True if the name, ignoring trailing whitespace, ends with the extension."""
    if not name or len(name) < 4:
        return False
    trimmed = name.rstrip(_WHITESPACE)
    if len(trimmed) < 4 or len(trimmed) < len(extension):
        return False
    return trimmed.endswith(extension)


def _can_open(path: str) -> bool:
    try:
        fd = os.open(path, os.O_RDONLY)
    except OSError:
        return False
    os.close(fd)
    return True


def _leading(elements: Iterable[ElementLine], last: Element) -> Iterable[ElementLine]:
    for element in elements:
        if element.kind > last:
            break
        yield element


def paths_are_valid(elements: Sequence[ElementLine]) -> bool:
    """True if every leading wall texture is a readable ``.png`` file."""
    return all(
        is_x_filetype(element.value, ".png") and _can_open(element.value)
        for element in _leading(elements, Element.EAST)
    )


def colors_are_valid(elements: Sequence[ElementLine]) -> bool:
    """True if the floor and ceiling lines after the textures hold valid colours."""
    rest = list(elements)
    skip = sum(1 for _ in _leading(rest, Element.EAST))
    return all(
        is_valid_color(element.value) for element in _leading(rest[skip:], Element.CEILING)
    )


def valid_textures(elements: Sequence[ElementLine]) -> bool:
    """Order, texture paths and colours all check out."""
    return order_is_valid(elements) and paths_are_valid(elements) and colors_are_valid(elements)